# Standard Library
import json
from pathlib import Path

import pytest

# Local modules
import region_lint.config
import region_lint.core
import region_lint.engine
import region_lint.registry


#============================================


def _run_lint(text: str) -> list[dict[str, object]]:
	"""
	Run the region lint engine with default plugins on a text blob.
	"""
	registry = region_lint.registry.build_registry()
	plugins = registry.resolve_plugins(set(), set(), set())
	issues = region_lint.engine.lint_text(text, None, plugins)
	return issues


#============================================


def test_region_inside_method_is_reported() -> None:
	text = (
		"class Widget\n"
		"{\n"
		"    void Run()\n"
		"    {\n"
		"#region Body\n"
		"        Work();\n"
		"#endregion\n"
		"    }\n"
		"}\n"
	)
	issues = _run_lint(text)
	assert len(issues) == 1
	assert issues[0]["severity"] == "WARNING"
	assert issues[0]["line"] == 5
	assert issues[0]["plugin"] == "regions_within_elements"
	assert "SA1123" in issues[0]["message"]
	assert "'Body'" in issues[0]["message"]


def test_region_around_members_is_clean() -> None:
	text = (
		"class Widget\n"
		"{\n"
		"    #region Methods\n"
		"    void Run()\n"
		"    {\n"
		"        Work();\n"
		"    }\n"
		"    #endregion\n"
		"}\n"
	)
	assert _run_lint(text) == []


def test_unterminated_region_in_method_gets_both_issues() -> None:
	text = (
		"class Widget\n"
		"{\n"
		"    void Run()\n"
		"    {\n"
		"#region Open\n"
		"    }\n"
		"}\n"
	)
	issues = _run_lint(text)
	found = {(issue["plugin"], issue["severity"], issue["line"]) for issue in issues}
	assert found == {
		("directive_pairing", "ERROR", 5),
		("regions_within_elements", "WARNING", 5),
	}


def test_pairing_errors_for_orphans() -> None:
	text = (
		"#endregion\n"
		"#if DEBUG\n"
		"#else\n"
		"class Widget { }\n"
	)
	issues = _run_lint(text)
	messages = [issue["message"] for issue in issues]
	assert messages == [
		"#endregion without matching #region",
		"#if without matching #endif",
	]
	assert [issue["line"] for issue in issues] == [1, 2]


def test_issues_are_sorted_by_line() -> None:
	text = (
		"class Widget\n"
		"{\n"
		"    void B()\n"
		"    {\n"
		"#region Second\n"
		"#endregion\n"
		"    }\n"
		"}\n"
		"#endregion\n"
	)
	issues = _run_lint(text)
	assert [issue["line"] for issue in issues] == [5, 9]


def test_lint_file_reads_bom_encoded_source(tmp_path: Path) -> None:
	path = tmp_path / "Widget.cs"
	path.write_text(
		"class Widget\n"
		"{\n"
		"    void Run()\n"
		"    {\n"
		"#region Body\n"
		"#endregion\n"
		"    }\n"
		"}\n",
		encoding="utf-8-sig",
	)
	registry = region_lint.registry.build_registry()
	plugins = registry.resolve_plugins({"regions_within_elements"}, set(), set())
	issues = region_lint.engine.lint_file(str(path), plugins)
	assert [issue["line"] for issue in issues] == [5]


def test_build_context_exposes_tree_and_directives() -> None:
	context = region_lint.engine.build_context("#region A\n#endregion\n", "a.cs")
	assert context["file_path"] == "a.cs"
	assert context["tree"].kind == "CompilationUnit"
	assert [d.kind for d in context["directives"]] == [
		"RegionDirectiveTrivia",
		"EndRegionDirectiveTrivia",
	]


#============================================


def test_registry_lists_builtins_in_order() -> None:
	registry = region_lint.registry.build_registry()
	ids = [plugin["id"] for plugin in registry.list_plugins()]
	assert ids == ["directive_pairing", "regions_within_elements"]


def test_registry_only_and_disable() -> None:
	registry = region_lint.registry.build_registry()
	only = registry.resolve_plugins({"directive_pairing"}, set(), set())
	assert [plugin["id"] for plugin in only] == ["directive_pairing"]
	rest = registry.resolve_plugins(set(), set(), {"directive_pairing"})
	assert [plugin["id"] for plugin in rest] == ["regions_within_elements"]


def test_registry_rejects_unknown_and_duplicate_ids() -> None:
	registry = region_lint.registry.build_registry()
	with pytest.raises(ValueError):
		registry.resolve_plugins(set(), {"no_such_plugin"}, set())
	with pytest.raises(ValueError):
		registry.register({"id": "directive_pairing", "name": "again", "run": None})


def test_registry_loads_external_plugin(tmp_path: Path) -> None:
	plugin_path = tmp_path / "todo_regions.py"
	plugin_path.write_text(
		"PLUGIN_ID = 'todo_regions'\n"
		"PLUGIN_NAME = 'Regions named TODO'\n"
		"DEFAULT_ENABLED = False\n"
		"\n"
		"def run(context):\n"
		"    return [\n"
		"        {'severity': 'WARNING', 'message': 'todo region', 'line': d.line}\n"
		"        for d in context['directives'] if d.name == 'TODO'\n"
		"    ]\n",
		encoding="utf-8",
	)
	registry = region_lint.registry.build_registry()
	registry.load_plugin_path(str(plugin_path))

	defaults = registry.resolve_plugins(set(), set(), set())
	assert "todo_regions" not in [plugin["id"] for plugin in defaults]

	plugins = registry.resolve_plugins({"todo_regions"}, set(), set())
	issues = region_lint.engine.lint_text("#region TODO\n#endregion\n", None, plugins)
	assert issues == [{"severity": "WARNING", "message": "todo region", "line": 1, "plugin": "todo_regions"}]


def test_registry_rejects_plugin_without_run(tmp_path: Path) -> None:
	plugin_path = tmp_path / "broken.py"
	plugin_path.write_text("PLUGIN_ID = 'broken'\nPLUGIN_NAME = 'Broken'\n", encoding="utf-8")
	registry = region_lint.registry.build_registry()
	with pytest.raises(ValueError):
		registry.load_plugin_path(str(plugin_path))


#============================================


def test_config_defaults_and_overrides(tmp_path: Path) -> None:
	defaults = region_lint.config.load_config(None)
	assert defaults["extensions"] == ".cs"
	assert defaults["disable"] == []

	config_path = tmp_path / "region_lint.json"
	config_path.write_text(json.dumps({"disable": ["directive_pairing"], "extensions": "cs,csx"}), encoding="utf-8")
	config = region_lint.config.load_config(str(config_path))
	assert config["disable"] == ["directive_pairing"]
	assert config["only"] == []
	assert region_lint.config.normalize_extensions(str(config["extensions"])) == [".cs", ".csx"]


@pytest.mark.parametrize(
	"payload",
	[
		{"severity": "ERROR"},
		{"only": "directive_pairing"},
		["directive_pairing"],
	],
)
def test_config_rejects_bad_values(tmp_path: Path, payload: object) -> None:
	config_path = tmp_path / "bad.json"
	config_path.write_text(json.dumps(payload), encoding="utf-8")
	with pytest.raises(ValueError):
		region_lint.config.load_config(str(config_path))


def test_split_csv_and_extensions() -> None:
	assert region_lint.config.split_csv(["a, b", "", "c,a"]) == {"a", "b", "c"}
	assert region_lint.config.normalize_extensions(" .CS, csx ,,") == [".cs", ".csx"]


#============================================


def test_format_and_summarize_issues() -> None:
	issues = [
		region_lint.core.make_issue("ERROR", "broken", line=3, plugin="directive_pairing"),
		region_lint.core.make_issue("WARNING", "region inside method"),
	]
	assert region_lint.core.summarize_issues(issues) == (1, 1)
	assert region_lint.core.format_issue("a.cs", issues[0], True) == "a.cs:3: ERROR(directive_pairing): broken"
	assert region_lint.core.format_issue("a.cs", issues[1], True) == "a.cs: WARNING: region inside method"
