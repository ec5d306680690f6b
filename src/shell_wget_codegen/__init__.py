"""Generate ``wget`` command-line snippets from HTTP request descriptions."""

from .codegen import convert, convert_with_defaults, generate_snippet, get_options
from .exceptions import ShellWgetError, ShellWgetUsageError, ShellWgetValidationError
from .models import FileSource, FormParam, GraphQLBody, Header, Request, RequestBody
from .options import ConversionOptions, OptionDescriptor

__all__ = [
    "ConversionOptions",
    "FileSource",
    "FormParam",
    "GraphQLBody",
    "Header",
    "OptionDescriptor",
    "Request",
    "RequestBody",
    "ShellWgetError",
    "ShellWgetUsageError",
    "ShellWgetValidationError",
    "convert",
    "convert_with_defaults",
    "generate_snippet",
    "get_options",
]
