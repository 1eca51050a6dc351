# Local modules
import region_lint.directives
import region_lint.parser


#============================================


def build_context(text: str, file_path: str | None) -> dict[str, object]:
	"""
	Parse text once and build the context dict shared by plugins.

	Args:
		text: Full file contents.
		file_path: Optional file path.

	Returns:
		dict[str, object]: Context dict.
	"""
	newlines = region_lint.parser.build_newline_index(text)
	tree = region_lint.parser.parse_text(text, newlines)
	directives = region_lint.directives.collect_directives(tree)
	context = {
		"file_path": file_path,
		"text": text,
		"newlines": newlines,
		"tree": tree,
		"directives": directives,
	}
	return context


#============================================


def _issue_key(issue: dict[str, object]) -> tuple[int, str]:
	line = issue.get("line")
	if not isinstance(line, int):
		line = 10**9
	return (line, str(issue.get("message", "")))


#============================================


def run_plugins(
	context: dict[str, object],
	plugins: list[dict[str, object]],
) -> list[dict[str, object]]:
	"""
	Run plugins and return their issues sorted by line then message.

	Args:
		context: Shared context dict.
		plugins: Plugin metadata list.

	Returns:
		list[dict[str, object]]: Issue list.
	"""
	issues: list[dict[str, object]] = []
	for plugin in plugins:
		plugin_id = str(plugin.get("id"))
		for issue in plugin["run"](context):
			issue.setdefault("plugin", plugin_id)
			issues.append(issue)
	return sorted(issues, key=_issue_key)


#============================================


def lint_text(
	text: str,
	file_path: str | None,
	plugins: list[dict[str, object]],
) -> list[dict[str, object]]:
	"""
	Lint a text blob with the given plugins.
	"""
	context = build_context(text, file_path)
	return run_plugins(context, plugins)


#============================================


def lint_file(file_path: str, plugins: list[dict[str, object]]) -> list[dict[str, object]]:
	"""
	Lint a single file.

	Args:
		file_path: Path to file.
		plugins: Enabled plugins.

	Returns:
		list[dict[str, object]]: Issue list.
	"""
	# utf-8-sig drops the BOM Visual Studio writes
	with open(file_path, "r", encoding="utf-8-sig") as handle:
		text = handle.read()
	return lint_text(text, file_path, plugins)
