# Local modules
import region_lint.core
import region_lint.directives
import region_lint.syntax


PLUGIN_ID = "directive_pairing"
PLUGIN_NAME = "#region/#endregion and #if/#endif pairing"
DEFAULT_ENABLED = True

UNMATCHED_MESSAGES = {
	region_lint.syntax.REGION_DIRECTIVE: "#region without matching #endregion",
	region_lint.syntax.END_REGION_DIRECTIVE: "#endregion without matching #region",
	region_lint.syntax.IF_DIRECTIVE: "#if without matching #endif",
	region_lint.syntax.ELIF_DIRECTIVE: "#elif without matching #if",
	region_lint.syntax.ELSE_DIRECTIVE: "#else without matching #if",
	region_lint.syntax.END_IF_DIRECTIVE: "#endif without matching #if",
}


#============================================


def run(context: dict[str, object]) -> list[dict[str, object]]:
	"""
	Report directives left without a partner after stack matching.

	Args:
		context: Shared lint context.

	Returns:
		list[dict[str, object]]: Issue list.
	"""
	issues: list[dict[str, object]] = []
	groups = region_lint.directives.group_directives(context.get("directives", []))
	for group in groups:
		first = group[0]
		if first.kind not in UNMATCHED_MESSAGES:
			continue
		closer = group[-1].kind
		if first.kind == region_lint.syntax.REGION_DIRECTIVE:
			if closer == region_lint.syntax.END_REGION_DIRECTIVE:
				continue
		elif first.kind == region_lint.syntax.IF_DIRECTIVE:
			if closer == region_lint.syntax.END_IF_DIRECTIVE:
				continue
		message = UNMATCHED_MESSAGES[first.kind]
		issue = region_lint.core.issue_at(region_lint.core.SEVERITY_ERROR, message, first)
		issues.append(issue)
	return issues
