"""C# region placement lint package."""

from region_lint.containment import is_completely_contained_in_body, outermost_block
from region_lint.directives import get_related_directives
from region_lint.engine import build_context, run_plugins, lint_text, lint_file
from region_lint.parser import parse_text
from region_lint.registry import build_registry
from region_lint.syntax import SyntaxNode

__all__ = [
	"is_completely_contained_in_body",
	"outermost_block",
	"get_related_directives",
	"build_context",
	"run_plugins",
	"lint_text",
	"lint_file",
	"parse_text",
	"build_registry",
	"SyntaxNode",
]
