"""Template AST to JSX."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..compiler import (
    BindingType,
    CommentNode,
    DocumentNode,
    ElementNode,
    InterpolationNode,
    TextNode,
    parse_template,
)
from ..diagnostics import WarningCode, WarningCollector, is_dangerous_binding
from ..registry import transform_custom_directive
from . import attributes
from .pipes import transform_pipe_expression
from .structural import (
    conditional_expression,
    generate_key_expression,
    map_expression,
    parse_for_expression,
)
from .tags import collect_custom_tags, is_slot_tag, is_special_tag, jsx_tag_name, resolve_tag, slot_name


TEXT_ESCAPES = {"{": '{"{"}', "}": '{"}"}', "<": '{"<"}', ">": '{">"}'}


@dataclass
class TransformContext:
    known_components: List = field(default_factory=list)
    directive_registry: Optional[object] = None
    pipe_registry: Optional[object] = None
    import_alias: str = "@"
    warnings: WarningCollector = field(default_factory=WarningCollector)
    used_pipes: Dict[str, None] = field(default_factory=dict)
    used_directives: Dict[str, None] = field(default_factory=dict)
    pipe_helpers: Dict[str, None] = field(default_factory=dict)
    template_refs: Dict[str, None] = field(default_factory=dict)
    named_slots: Dict[str, None] = field(default_factory=dict)
    slot_context: str = "component"
    loop_counter: int = 0
    has_outlet: bool = False
    has_default_slot: bool = False


@dataclass
class TransformResult:
    jsx: str
    imports: List = field(default_factory=list)
    used_pipes: List = field(default_factory=list)
    used_directives: List = field(default_factory=list)
    warnings: List = field(default_factory=list)
    errors: List = field(default_factory=list)
    pipe_helpers: List[str] = field(default_factory=list)
    template_refs: List[str] = field(default_factory=list)
    named_slots: List[str] = field(default_factory=list)
    has_outlet: bool = False
    has_default_slot: bool = False

    @property
    def has_slots(self):
        return self.has_default_slot or bool(self.named_slots)


class JSXCodeGenerator:
    def __init__(self, context):
        self.context = context

    def generate(self, document):
        parts = [part for part in (self.visit(child) for child in document.children) if part]
        if not parts:
            return "null"
        if len(parts) > 1:
            return "<>\n      " + "\n      ".join(parts) + "\n    </>"
        part = parts[0]
        if part.startswith("<") or part.startswith("{"):
            return part
        return f"<>{part}</>"

    def visit(self, node):
        if isinstance(node, ElementNode):
            return self.visit_element(node)
        if isinstance(node, TextNode):
            return self.visit_text(node)
        if isinstance(node, InterpolationNode):
            return self.visit_interpolation(node)
        if isinstance(node, CommentNode):
            return ""
        raise TypeError(f"Unexpected node {node!r}")

    def visit_text(self, node):
        content = node.content
        if not content.strip():
            if "\n" in content or not content:
                return ""
            return '{" "}'
        return "".join(TEXT_ESCAPES.get(char, char) for char in content)

    def visit_interpolation(self, node):
        if not node.expression.strip():
            return ""
        return "{" + self.pipe(node.expression) + "}"

    def pipe(self, expression):
        context = self.context
        return transform_pipe_expression(
            expression,
            pipe_registry=context.pipe_registry,
            warnings=context.warnings,
            used_pipes=context.used_pipes,
            helpers=context.pipe_helpers,
        )

    def visit_element(self, node):
        if is_slot_tag(node.tag_name):
            return self.visit_slot(node)
        if is_special_tag(node.tag_name):
            self.context.has_outlet = True
            return "<Component />"

        tag = jsx_tag_name(node.tag_name)
        if_directive = node.get_directive("if")
        else_directive = node.get_directive("else")
        for_directive = node.get_directive("for")
        self.check_conditionals(if_directive, else_directive)

        parts = self.build_attributes(node)
        children = "".join(self.visit(child) for child in node.children)

        loop = None
        if for_directive is not None:
            loop = parse_for_expression(for_directive.expression, self.context.warnings)
            if loop is not None:
                self.context.loop_counter += 1
                key = generate_key_expression(loop)
                if key == loop.item_var and self.context.loop_counter > 1:
                    key = f'"{self.context.loop_counter}_" + {key}'
                parts.append(f"key={{{key}}}")

        attrs = " " + " ".join(parts) if parts else ""
        if node.self_closing or not children:
            jsx = f"<{tag}{attrs} />"
        else:
            jsx = f"<{tag}{attrs}>{children}</{tag}>"

        expression = None
        if loop is not None:
            expression = map_expression(jsx, loop)
        if if_directive is not None and if_directive.expression.strip():
            else_component = else_directive.expression if else_directive is not None else None
            expression = conditional_expression(expression or jsx, if_directive.expression, else_component)
        if expression is not None:
            return "{" + expression + "}"
        return jsx

    def visit_slot(self, node):
        """``<slot>``/``<ng-content>``: page content in a layout, projected children elsewhere."""
        context = self.context
        if context.slot_context == "layout":
            context.has_outlet = True
            return "<Component />"
        name = slot_name(node)
        if name is None:
            context.has_default_slot = True
            return "{children}"
        context.named_slots.setdefault(name, None)
        return "{" + name + "}"

    def check_conditionals(self, if_directive, else_directive):
        warnings = self.context.warnings
        if if_directive is not None and not if_directive.expression.strip():
            warnings.warn(WarningCode.EMPTY_IF_CONDITION, '*if directive has empty condition. Usage: *if="someCondition"')
        if else_directive is not None and if_directive is None:
            warnings.warn(
                WarningCode.ORPHAN_ELSE,
                "*else directive found without *if. *else must be used together with *if on the same element",
            )

    def build_attributes(self, node):
        """JSX attribute parts in emission order."""
        context = self.context
        warnings = context.warnings
        parts = []

        for attribute in node.attributes:
            if attribute.name.startswith("#") and len(attribute.name) > 1:
                ref = attribute.name[1:]
                context.template_refs.setdefault(ref, None)
                parts.append(f"ref={{{ref} as any}}")

        for directive in node.directives:
            if directive.is_built_in:
                continue
            spread = transform_custom_directive(directive.name, directive.expression, context.directive_registry)
            if spread is None:
                warnings.warn(WarningCode.UNKNOWN_DIRECTIVE, f"Unknown directive *{directive.name} ignored")
                continue
            context.used_directives.setdefault(directive.name, None)
            parts.append(spread)

        static_class = static_style = dynamic_class = None
        conditional_classes = []
        style_bindings = []
        for attribute in node.attributes:
            if attribute.name == "class":
                static_class = attribute.value
            elif attribute.name == "style":
                static_style = attribute.value
        for binding in node.bindings:
            if binding.kind is BindingType.PROPERTY and binding.name == "class":
                dynamic_class = attributes.transform_reserved_words(binding.expression)
            elif binding.kind is BindingType.CLASS:
                if not binding.expression.strip():
                    warnings.warn(WarningCode.EMPTY_BINDING_EXPRESSION, f"[class.{binding.name}] binding has empty expression")
                    continue
                conditional_classes.append((binding.name, binding.expression))
            elif binding.kind is BindingType.STYLE:
                if not binding.expression.strip():
                    warnings.warn(WarningCode.EMPTY_BINDING_EXPRESSION, f"[style.{binding.name}] binding has empty expression")
                    continue
                style_bindings.append(attributes.style_binding_value(binding.name, binding.expression))

        class_attr = attributes.class_name_attribute(static_class, conditional_classes, dynamic_class)
        if class_attr:
            parts.append(class_attr)
        style_attr = attributes.style_attribute(static_style, style_bindings)
        if style_attr:
            parts.append(style_attr)

        for binding in node.two_way_bindings:
            if not binding.expression.strip():
                warnings.warn(
                    WarningCode.INVALID_TWO_WAY_BINDING,
                    f"[({binding.name})] two-way binding has empty expression",
                )
                continue
            parts.extend(attributes.two_way_binding(binding.name, binding.expression.strip(), node.tag_name))

        for item in node.ordered_attributes():
            if item in node.events:
                part = self.event_attribute(item)
            elif item in node.bindings:
                part = self.binding_attribute(item)
            elif item in node.attributes:
                part = self.standard_attribute(item)
            else:
                part = None
            if part:
                parts.append(part)
        return parts

    def event_attribute(self, event):
        if not event.handler.strip():
            self.context.warnings.warn(WarningCode.EMPTY_BINDING_EXPRESSION, f"({event.name}) event binding has empty handler")
            return None
        return attributes.event_handler(event.name, event.handler)

    def binding_attribute(self, binding):
        if binding.kind in (BindingType.CLASS, BindingType.STYLE):
            return None
        if binding.kind is BindingType.PROPERTY and binding.name == "class":
            return None
        label = binding.raw_name
        if not binding.expression.strip():
            self.context.warnings.warn(WarningCode.EMPTY_BINDING_EXPRESSION, f"{label} binding has empty expression")
            return None
        if is_dangerous_binding(binding.name):
            self.context.warnings.warn(
                WarningCode.DANGEROUS_BINDING,
                f"{label} is a dangerous binding that can lead to XSS vulnerabilities. Consider using safer alternatives.",
            )
        value = attributes.strip_bind_this(self.pipe(binding.expression))
        if binding.kind is BindingType.ATTRIBUTE:
            return f"{binding.name}={{{value}}}"
        return f"{attributes.html_attr_to_jsx(binding.name)}={{{value}}}"

    def standard_attribute(self, attribute):
        if attribute.name in ("class", "style") or attribute.name.startswith("#"):
            return None
        return attributes.standard_attribute(attribute.name, attribute.value, self.pipe)


def transform(template, known_components=(), directive_registry=None, pipe_registry=None, import_alias="@",
              slot_context="component"):
    """Compile template markup to a JSX expression plus everything the caller must import."""
    result = parse_template(template)
    context = TransformContext(
        known_components=list(known_components),
        directive_registry=directive_registry,
        pipe_registry=pipe_registry,
        import_alias=import_alias,
        slot_context=slot_context,
    )
    jsx = JSXCodeGenerator(context).generate(result.document)

    imports = []
    for tag in collect_custom_tags(result.document):
        tag_import = resolve_tag(tag, context.known_components, import_alias)
        if tag_import is not None:
            imports.append(tag_import)

    for error in result.errors:
        context.warnings.warn(error.code, str(error))

    return TransformResult(
        jsx=jsx,
        imports=imports,
        used_pipes=[pipe_registry.get(name) for name in context.used_pipes],
        used_directives=[directive_registry.get(name) for name in context.used_directives],
        warnings=context.warnings.get_warnings(),
        errors=list(result.errors),
        pipe_helpers=list(context.pipe_helpers),
        template_refs=list(context.template_refs),
        named_slots=list(context.named_slots),
        has_outlet=context.has_outlet,
        has_default_slot=context.has_default_slot,
    )


html_to_jsx = transform


def as_return_expression(jsx):
    """A top-level ``{expr}`` is not valid after ``return``; unwrap it into ``(expr)``."""
    if jsx.startswith("{") and jsx.endswith("}") and not jsx.startswith("{..."):
        return f"({jsx[1:-1]})"
    return jsx
