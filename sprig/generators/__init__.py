from .base import GeneratedFile
from .components import component_output_path, generate_component
from .directives import generate_directive, generate_directives_index
from .layouts import generate_layout
from .pipes import generate_pipe, generate_pipe_helpers, generate_pipes_index
from .routes import check_route_policy, generate_route, route_output_path, route_path
from .services import generate_service_container
from .styles import compile_component_style, compile_stylesheet, style_import_path

__all__ = [
    "GeneratedFile",
    "component_output_path", "generate_component",
    "generate_directive", "generate_directives_index",
    "generate_layout",
    "generate_pipe", "generate_pipe_helpers", "generate_pipes_index",
    "check_route_policy", "generate_route", "route_output_path", "route_path",
    "generate_service_container",
    "compile_component_style", "compile_stylesheet", "style_import_path",
]
