import enum


class BindingType(enum.Enum):
    STANDARD = "standard"       # class="x"
    DIRECTIVE = "directive"     # *if="x"
    EVENT = "event"             # (click)="x()"
    TWO_WAY = "two_way"         # [(value)]="x"
    PROPERTY = "property"       # [value]="x"
    CLASS = "class"             # [class.active]="x"
    STYLE = "style"             # [style.width.px]="x"
    ATTRIBUTE = "attribute"     # [attr.aria-label]="x"


# Kinds stored in BindingNode.kind
BINDING_KINDS = (BindingType.PROPERTY, BindingType.CLASS, BindingType.STYLE, BindingType.ATTRIBUTE)

BUILT_IN_DIRECTIVES = frozenset({"if", "else", "for"})


def get_binding_type(name):
    """Classify a raw attribute name. Checked in priority order; every string maps to exactly one type."""
    if name.startswith("*"):
        return BindingType.DIRECTIVE
    if name.startswith("[(") and name.endswith(")]"):
        return BindingType.TWO_WAY
    if name.startswith("(") and name.endswith(")"):
        return BindingType.EVENT
    if name.startswith("[class.") and name.endswith("]"):
        return BindingType.CLASS
    if name.startswith("[style.") and name.endswith("]"):
        return BindingType.STYLE
    if name.startswith("[attr.") and name.endswith("]"):
        return BindingType.ATTRIBUTE
    if name.startswith("[") and name.endswith("]"):
        return BindingType.PROPERTY
    return BindingType.STANDARD


def extract_binding_name(name, binding_type):
    """Strip the binding syntax and return the semantic name."""
    if binding_type is BindingType.DIRECTIVE:
        return name[1:]
    if binding_type is BindingType.TWO_WAY:
        return name[2:-2]
    if binding_type is BindingType.EVENT:
        return name[1:-1]
    if binding_type in (BindingType.CLASS, BindingType.STYLE):
        return name[7:-1]
    if binding_type is BindingType.ATTRIBUTE:
        return name[6:-1]
    if binding_type is BindingType.PROPERTY:
        return name[1:-1]
    return name


def classify_attribute(name):
    binding_type = get_binding_type(name)
    return binding_type, extract_binding_name(name, binding_type)


def is_built_in_directive(name):
    return name in BUILT_IN_DIRECTIVES
