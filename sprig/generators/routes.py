"""Route pages: ``@Route`` classes become ``define.page`` modules."""

import re

from ..compiler import has_interactive_bindings, parse_template
from ..exceptions import RoutePolicyError
from ..logging import get_logger
from ..metadata import parse_class
from ..metadata.classes import LIFECYCLE_METHODS
from ..transpiler import as_return_expression, transform
from .base import GeneratedFile, collapse_slashes, plain_getter, plain_method, plain_resolver, transform_import_lines

logger = get_logger("generators.routes")

ROUTE_PATH_RULES = (
    (re.compile(r"/routes/"), "/"),
    (re.compile(r"^routes/"), ""),
    (re.compile(r"^\([^)]+\)/routes/"), ""),
    (re.compile(r"^home/"), ""),
    (re.compile(r"^home$"), "index"),
    (re.compile(r"_app/?$"), ""),
)
DYNAMIC_FILENAME = re.compile(r"^\[([^\]]+)\]\.ts$")


def route_path(relative_path):
    """``landing/routes/about`` -> ``landing/about``; ``home`` -> ``index``."""
    path = relative_path
    for pattern, replacement in ROUTE_PATH_RULES:
        path = pattern.sub(replacement, path, count=1)
    return path


def route_output_path(relative_path, original_filename="mod.ts", explicit_path=None):
    path = explicit_path.strip("/") if explicit_path is not None else route_path(relative_path)
    dynamic = DYNAMIC_FILENAME.match(original_filename)
    if dynamic:
        return collapse_slashes(f"routes/{path}/[{dynamic.group(1)}].tsx")
    if path in ("index", ""):
        return "routes/index.tsx"
    if path.endswith("/index"):
        return collapse_slashes(f"routes/{path[:-len('/index')]}/index.tsx")
    return collapse_slashes(f"routes/{path}.tsx")


def check_route_policy(route):
    """Routes render on the server only; events and two-way bindings are refused."""
    if has_interactive_bindings(parse_template(route.template).document):
        raise RoutePolicyError(route.relative_path)


def data_destructuring(inputs):
    lines = []
    for item in inputs:
        if item.default_value:
            lines.append(f"  const {item.var_name} = data.{item.name} ?? {item.default_value};")
        else:
            lines.append(f"  const {item.var_name} = data.{item.name};")
    return lines


def generate_route(route, known_components=(), directive_registry=None, pipe_registry=None,
                   import_alias="@", helpers_import=None):
    check_route_policy(route)

    result = transform(route.template, known_components, directive_registry, pipe_registry, import_alias)
    helpers_import = helpers_import or f"{import_alias}/pipes/helpers.ts"
    import_lines = [f'import {{ define }} from "{import_alias}/utils.ts";']
    import_lines.extend(transform_import_lines(result, helpers_import))

    parsed = parse_class(route.source, "Route")
    inputs = route.inputs
    body = data_destructuring(inputs)
    if parsed is not None:
        resolve = plain_resolver(inputs, parsed.dependencies)
        body.extend(plain_getter(getter, resolve) for getter in parsed.getters)
        body.extend(
            plain_method(method, resolve)
            for method in parsed.methods
            if method.name not in LIFECYCLE_METHODS
        )

    class_name = route.class_name
    signature = f"{class_name}({{ data }})" if inputs else f"{class_name}()"
    jsx = as_return_expression(result.jsx)
    if body:
        function = f"function {signature} {{\n" + "\n".join(body) + f"\n\n  return {jsx};\n}}"
    else:
        function = f"function {signature} {{\n  return {jsx};\n}}"

    content = "\n".join(import_lines) + f"\n\nexport default define.page({function});\n"
    output_path = route_output_path(route.relative_path, route.original_filename, route.metadata.path)
    logger.debug("Route %s -> %s", route.relative_path, output_path)
    return GeneratedFile(output_path, content, result.warnings)
