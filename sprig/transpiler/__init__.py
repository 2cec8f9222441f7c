from .pipes import (
    BUILT_IN_PIPES,
    PipeCall,
    needs_parens,
    parse_pipe_expression,
    transform_pipe_expression,
)
from .structural import (
    ForDirectiveInfo,
    conditional_expression,
    generate_key_expression,
    map_expression,
    parse_for_expression,
)
from .tags import TagImport, collect_custom_tags, is_custom_tag, is_standard_html_tag, resolve_tag
from .code_generator import (
    JSXCodeGenerator,
    TransformContext,
    TransformResult,
    as_return_expression,
    html_to_jsx,
    transform,
)

__all__ = [
    "BUILT_IN_PIPES", "PipeCall", "needs_parens", "parse_pipe_expression", "transform_pipe_expression",
    "ForDirectiveInfo", "conditional_expression", "generate_key_expression", "map_expression",
    "parse_for_expression",
    "TagImport", "collect_custom_tags", "is_custom_tag", "is_standard_html_tag", "resolve_tag",
    "JSXCodeGenerator", "TransformContext", "TransformResult", "as_return_expression", "html_to_jsx",
    "transform",
]
