# Local modules
import region_lint.containment
import region_lint.core
import region_lint.syntax


PLUGIN_ID = "regions_within_elements"
PLUGIN_NAME = "SA1123 Do not place regions within elements"
DEFAULT_ENABLED = True

MESSAGE = "SA1123: Region must not be located within a code element"


#============================================


def run(context: dict[str, object]) -> list[dict[str, object]]:
	"""
	Report each #region whose whole group sits inside one element body.

	Args:
		context: Shared lint context.

	Returns:
		list[dict[str, object]]: Issue list.
	"""
	issues: list[dict[str, object]] = []
	for directive in context.get("directives", []):
		if directive.kind != region_lint.syntax.REGION_DIRECTIVE:
			continue
		if not region_lint.containment.is_completely_contained_in_body(directive):
			continue
		message = MESSAGE
		if directive.name:
			message = f"{MESSAGE} ('{directive.name}')"
		issue = region_lint.core.issue_at(region_lint.core.SEVERITY_WARNING, message, directive)
		issues.append(issue)
	return issues
