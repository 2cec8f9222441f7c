"""Sprig: compiles Angular-style templates and decorated classes into JSX modules."""

__version__ = "0.1.0"

from .config import CompilerConfig, load_config
from .exceptions import ConfigError, RoutePolicyError, SprigError, TemplateSyntaxError
from .logging import configure_logging, get_logger
from .compiler import parse_template, tokenize
from .transpiler import TransformResult, transform
from .registry import DirectiveRegistry, PipeRegistry
from .build import CompilationResult, SprigCompiler, compile_project, discover

__all__ = [
    "__version__",
    "CompilerConfig", "load_config",
    "ConfigError", "RoutePolicyError", "SprigError", "TemplateSyntaxError",
    "configure_logging", "get_logger",
    "parse_template", "tokenize",
    "TransformResult", "transform",
    "DirectiveRegistry", "PipeRegistry",
    "CompilationResult", "SprigCompiler", "compile_project", "discover",
]
