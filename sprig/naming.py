import re

# Identifiers that cannot be used as local variable names in generated code
JS_RESERVED_WORDS = {
    "break", "case", "catch", "class", "const", "continue", "debugger", "default",
    "delete", "do", "else", "enum", "export", "extends", "false", "finally", "for",
    "function", "if", "import", "in", "instanceof", "new", "null", "return", "super",
    "switch", "this", "throw", "true", "try", "typeof", "var", "void", "while", "with",
    "yield", "let", "static", "implements", "interface", "package", "private", "protected",
    "public", "await",
}


def kebab_to_pascal(name):
    """status-badge -> StatusBadge"""
    return "".join(part[:1].upper() + part[1:] for part in name.split("-"))


def kebab_to_camel(name):
    """animation-duration -> animationDuration"""
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), name)


def lower_first(name):
    return name[:1].lower() + name[1:]


def safe_var_name(name):
    if name in JS_RESERVED_WORDS:
        if name == "class":
            return "className"
        return f"_{name}"
    return name
