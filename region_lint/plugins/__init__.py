"""Built-in plugin list."""

BUILTIN_PLUGINS = [
	"region_lint.plugins.directive_pairing",
	"region_lint.plugins.regions_within_elements",
]
