# Local modules
import region_lint.syntax


SEVERITY_ERROR = "ERROR"
SEVERITY_WARNING = "WARNING"


#============================================


def make_issue(
	severity: str,
	message: str,
	line: int | None = None,
	plugin: str | None = None,
) -> dict[str, object]:
	"""
	Create an issue dict.

	Args:
		severity: Severity label.
		message: Issue message.
		line: Optional line number.
		plugin: Optional plugin id.

	Returns:
		dict[str, object]: Issue dict.
	"""
	issue: dict[str, object] = {
		"severity": severity,
		"message": message,
	}
	if line is not None:
		issue["line"] = int(line)
	if plugin is not None:
		issue["plugin"] = plugin
	return issue


#============================================


def issue_at(
	severity: str,
	message: str,
	node: region_lint.syntax.SyntaxNode,
) -> dict[str, object]:
	"""
	Create an issue anchored at a syntax node's line.
	"""
	return make_issue(severity, message, line=node.line)


#============================================


def summarize_issues(issues: list[dict[str, object]]) -> tuple[int, int]:
	"""
	Count issues by severity.

	Returns:
		tuple[int, int]: (errors, warnings)
	"""
	errors = 0
	warnings = 0
	for issue in issues:
		if issue.get("severity") == SEVERITY_ERROR:
			errors += 1
		else:
			warnings += 1
	return errors, warnings


#============================================


def format_issue(file_path: str, issue: dict[str, object], show_plugin: bool) -> str:
	"""
	Format an issue as a "path:line: SEVERITY: message" line.

	Args:
		file_path: Path to the linted file.
		issue: Issue dict.
		show_plugin: Whether to append the plugin id to the severity.

	Returns:
		str: Formatted issue line.
	"""
	severity = str(issue.get("severity", SEVERITY_WARNING))
	plugin = issue.get("plugin")
	if show_plugin and plugin:
		severity = f"{severity}({plugin})"
	message = str(issue.get("message", ""))
	location = file_path
	line = issue.get("line")
	if isinstance(line, int):
		location = f"{file_path}:{line}"
	return f"{location}: {severity}: {message}"
