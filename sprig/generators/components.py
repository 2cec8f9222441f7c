"""Component modules: server components and interactive islands."""

import re

from ..logging import get_logger
from ..metadata import generate_props_destructuring, generate_props_interface
from ..metadata.classes import DESTROY_METHODS, INIT_METHODS
from ..naming import safe_var_name
from ..transpiler import as_return_expression, transform
from ..transpiler.attributes import strip_bind_this
from .base import (
    GeneratedFile,
    arrow_expression,
    block,
    plain_getter,
    plain_method,
    plain_resolver,
    service_var_name,
    transform_import_lines,
)

logger = get_logger("generators.components")


def component_output_path(component):
    folder = "islands" if component.is_island else "components"
    return f"{folder}/{component.class_name}.tsx"


def rewrite_service_references(template, dependencies):
    """``counter.increment()`` -> ``counterService.increment()`` for injected services."""
    for dependency in dependencies:
        name = re.escape(dependency.name)
        replacement = service_var_name(dependency.type) + "."
        template = re.sub(rf"\bthis\.{name}\.", replacement, template)
        template = re.sub(rf"(?<![\w$.]){name}\.", replacement, template)
    return template


def signal_references(jsx, names):
    """Append ``.value`` to bare signal names in JSX expressions, leaving calls and members alone."""
    for name in names:
        pattern = re.compile(
            r"(\{|\s|\(|!)" + re.escape(name) + r"(?!\.value)(?!\s*\()(?=\s*(?:[}&|?:.)\]]|[!=<>]=?=?))"
        )
        jsx = pattern.sub(lambda m, name=name: f"{m.group(1)}{name}.value", jsx)
    return jsx


def assigned_inputs(inputs, parsed):
    """Inputs written to by a method or getter; these need to become signals."""
    assigned = set()
    for member in list(parsed.methods) + list(parsed.getters):
        assigned.update(member.body.assigned_this_members())
    return [item for item in inputs if item.property_name in assigned]


def island_resolver(parsed, inputs, signal_inputs, template_refs):
    names = {}
    signal_names = {item.property_name for item in signal_inputs}
    for item in inputs:
        var = safe_var_name(item.property_name)
        names[item.property_name] = f"{var}.value" if item.property_name in signal_names else var
    for ref in template_refs:
        names[ref] = f"{ref}.current"
    for prop in parsed.state_properties:
        names[prop.name] = f"{prop.name}.value"
    for getter in parsed.getters:
        names[getter.name] = f"{getter.name}.value"
    for method in parsed.methods:
        names[method.name] = method.name
    for dependency in parsed.dependencies:
        names[dependency.name] = service_var_name(dependency.type)

    def resolve(member):
        return names.get(member, member)

    return resolve


def slot_props(result):
    """Props a component projects: ``children`` for the default slot, then each named slot."""
    names = ["children"] if result.has_default_slot else []
    return names + list(result.named_slots)


def _type_argument(type_text):
    return f"<{type_text}>" if type_text else ""


def island_sections(parsed, signal_inputs, resolve):
    state = []
    for prop in parsed.state_properties:
        initial = prop.initial_value if prop.initial_value is not None else "undefined"
        state.append(f"  const {prop.name} = useSignal{_type_argument(prop.type)}({initial});")
    for item in signal_inputs:
        default = item.default_value or ("[]" if item.type and "[]" in item.type else "undefined")
        state.append(
            f"  const {safe_var_name(item.property_name)} = useSignal{_type_argument(item.type)}(props.{item.name} ?? {default});"
        )
    for getter in parsed.getters:
        computed = f"computed{_type_argument(getter.return_type)}"
        if getter.body.is_single_expression:
            state.append(f"  const {getter.name} = {computed}(() => {arrow_expression(strip_bind_this(getter.body.expression(resolve)))});")
        else:
            state.append(f"  const {getter.name} = {computed}(() => {{\n{block(strip_bind_this(getter.body.text(resolve)))}\n  }});")

    methods = []
    init_body = destroy_body = ""
    for method in parsed.methods:
        body = strip_bind_this(method.body.text(resolve))
        if method.name in INIT_METHODS:
            init_body = body
        elif method.name in DESTROY_METHODS:
            destroy_body = body
        else:
            prefix = "async " if method.is_async else ""
            params = ", ".join(method.params)
            methods.append(f"  const {method.name} = {prefix}({params}) => {{\n{block(body)}\n  }};")

    effect = []
    if init_body or destroy_body:
        effect.append("  useEffect(() => {")
        if init_body:
            effect.append(block(init_body))
        if destroy_body:
            effect.append("    return () => {\n" + block(destroy_body, "      ") + "\n    };")
        effect.append("  }, []);")
    return state, effect, methods


def server_sections(parsed, inputs):
    resolve = plain_resolver(inputs, parsed.dependencies)
    state = [
        f"  const {prop.name} = {prop.initial_value if prop.initial_value is not None else 'undefined'};"
        for prop in parsed.state_properties
    ]
    state.extend(plain_getter(getter, resolve) for getter in parsed.getters)
    methods = [
        plain_method(method, resolve)
        for method in parsed.methods
        if method.name not in INIT_METHODS + DESTROY_METHODS
    ]
    return state, [], methods


def generate_component(component, known_components=(), directive_registry=None, pipe_registry=None,
                       import_alias="@", style_path=None, helpers_import=None):
    parsed = component.parsed_class
    dependencies = parsed.dependencies if parsed is not None else []
    inputs = component.inputs
    is_island = component.is_island
    class_name = component.class_name

    template = rewrite_service_references(component.template, dependencies)
    result = transform(template, known_components, directive_registry, pipe_registry, import_alias)
    jsx = result.jsx

    signal_inputs = assigned_inputs(inputs, parsed) if is_island and parsed is not None else []
    state_props = parsed.state_properties if parsed is not None else []
    getters = parsed.getters if parsed is not None else []
    if is_island:
        names = [prop.name for prop in state_props] + [getter.name for getter in getters]
        names += [item.property_name for item in signal_inputs]
        jsx = signal_references(jsx, names)

    import_lines = []
    if result.has_slots:
        import_lines.append('import type { ComponentChildren } from "preact";')
    if is_island and parsed is not None:
        signals = []
        if state_props or signal_inputs:
            signals.append("useSignal")
        if getters:
            signals.append("computed")
        if signals:
            import_lines.append(f'import {{ {", ".join(signals)} }} from "@preact/signals";')
        hooks = []
        if any(method.name in INIT_METHODS + DESTROY_METHODS for method in parsed.methods):
            hooks.append("useEffect")
        if result.template_refs:
            hooks.append("useRef")
        if hooks:
            import_lines.append(f'import {{ {", ".join(hooks)} }} from "preact/hooks";')
    if dependencies:
        getters_list = ", ".join(f"get{dependency.type}" for dependency in dependencies)
        import_lines.append(f'import {{ {getters_list} }} from "{import_alias}/services/container.ts";')
    if style_path:
        import_lines.append(f'import "{style_path}";')
    import_lines.extend(transform_import_lines(result, helpers_import or f"{import_alias}/pipes/helpers.ts"))

    body = [f"  const {service_var_name(dep.type)} = get{dep.type}();" for dep in dependencies]
    regular_inputs = [item for item in inputs if item not in signal_inputs]
    if regular_inputs:
        body.append(generate_props_destructuring(regular_inputs))
    body.extend(f"  const {{ {slot} }} = props;" for slot in slot_props(result))
    if is_island:
        body.extend(f"  const {ref} = useRef<HTMLElement | null>(null);" for ref in result.template_refs)
    if parsed is not None:
        if is_island:
            resolve = island_resolver(parsed, inputs, signal_inputs, result.template_refs)
            state, effect, methods = island_sections(parsed, signal_inputs, resolve)
        else:
            state, effect, methods = server_sections(parsed, inputs)
        body.extend(state)
        body.extend(effect)
        body.extend(methods)

    props_interface = ""
    signature = f"{class_name}()"
    if inputs or result.has_slots:
        slot_lines = [f"  {slot}?: ComponentChildren;" for slot in slot_props(result)]
        props_interface = generate_props_interface(class_name, inputs, slot_lines) + "\n\n"
        signature = f"{class_name}(props: {class_name}Props)"

    jsx = as_return_expression(jsx)
    imports_section = "\n".join(import_lines) + "\n\n" if import_lines else ""
    if body:
        function = f"export default function {signature} {{\n" + "\n".join(body) + f"\n\n  return {jsx};\n}}\n"
    else:
        function = f"export default function {signature} {{\n  return {jsx};\n}}\n"

    output_path = component_output_path(component)
    logger.debug("Component %s -> %s", class_name, output_path)
    return GeneratedFile(output_path, imports_section + props_interface + function, result.warnings)
