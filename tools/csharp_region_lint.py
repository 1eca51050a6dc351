#!/usr/bin/env python3

# Standard Library
import argparse
import json
import os
import sys

# Repo root on the path for local imports when run from a checkout
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# Local modules
import region_lint.config
import region_lint.core
import region_lint.engine
import region_lint.registry


#============================================


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command-line arguments.

	Extensions, extra plugin files and enabled optional plugins come from
	the JSON settings file; only per-run choices are flags.

	Args:
		argv: Argument list, sys.argv[1:] when None.

	Returns:
		argparse.Namespace: Parsed arguments.
	"""
	parser = argparse.ArgumentParser(
		description="Report C# #region blocks placed inside method, accessor or lambda bodies.",
	)
	parser.add_argument(
		"paths",
		nargs="*",
		default=["."],
		help="C# files or directories to scan (default: current directory).",
	)
	parser.add_argument(
		"-c",
		"--config",
		dest="config_file",
		help="JSON settings file (extensions, plugin_paths, only, enable, disable).",
	)
	parser.add_argument(
		"--only",
		dest="only_plugins",
		action="append",
		default=[],
		help="Comma-separated rule ids to run exclusively, e.g. regions_within_elements.",
	)
	parser.add_argument(
		"--disable",
		dest="disable_plugins",
		action="append",
		default=[],
		help="Comma-separated rule ids to skip, e.g. directive_pairing.",
	)
	parser.add_argument(
		"--list-plugins",
		dest="list_plugins",
		action="store_true",
		help="List rule ids and exit.",
	)
	parser.add_argument(
		"--json",
		dest="json_output",
		action="store_true",
		help="Emit issues and counts as JSON.",
	)
	parser.add_argument(
		"--fail-on-warn",
		dest="fail_on_warn",
		action="store_true",
		help="Exit non-zero on SA1123 warnings, not just pairing errors.",
	)
	args = parser.parse_args(argv)
	return args


#============================================


def find_files(paths: list[str], extensions: list[str]) -> list[str]:
	"""
	Expand files and directories into a sorted list of source files.

	Args:
		paths: Files or directories given on the command line.
		extensions: File extensions to include from directories.

	Returns:
		list[str]: Sorted file paths.
	"""
	matches: set[str] = set()
	for path in paths:
		if os.path.isfile(path):
			matches.add(path)
			continue
		if not os.path.isdir(path):
			raise FileNotFoundError(f"Input path not found: {path}")
		for root, dirs, files in os.walk(path):
			# build output never holds hand-written regions
			dirs[:] = sorted(d for d in dirs if d not in {"bin", "obj", ".git"})
			for filename in files:
				if os.path.splitext(filename)[1].lower() in extensions:
					matches.add(os.path.join(root, filename))
	return sorted(matches)


#============================================


def list_plugins(registry: region_lint.registry.Registry) -> None:
	"""
	Print available plugins.
	"""
	for plugin in registry.list_plugins():
		default_flag = "default" if plugin.get("default_enabled") is True else "optional"
		print(f"{plugin.get('id')}: {plugin.get('name')} ({default_flag})")


#============================================


def main(argv: list[str] | None = None) -> None:
	"""
	Run the region lint checker.
	"""
	args = parse_args(argv)
	config = region_lint.config.load_config(args.config_file)
	registry = region_lint.registry.build_registry()

	for plugin_path in config["plugin_paths"]:
		registry.load_plugin_path(plugin_path)

	if args.list_plugins:
		list_plugins(registry)
		return

	only_ids = region_lint.config.split_csv(list(config["only"]) + args.only_plugins)
	enable_ids = region_lint.config.split_csv(list(config["enable"]))
	disable_ids = region_lint.config.split_csv(list(config["disable"]) + args.disable_plugins)
	plugins = registry.resolve_plugins(only_ids, enable_ids, disable_ids)

	extensions = region_lint.config.normalize_extensions(str(config["extensions"]))
	files_to_check = find_files(args.paths, extensions)

	issues: list[dict[str, object]] = []
	for file_path in files_to_check:
		file_issues = region_lint.engine.lint_file(file_path, plugins)
		for issue in file_issues:
			issue["file"] = file_path
			if not args.json_output:
				print(region_lint.core.format_issue(file_path, issue, True))
		issues.extend(file_issues)

	error_count, warn_count = region_lint.core.summarize_issues(issues)

	if args.json_output:
		summary = {
			"files_checked": len(files_to_check),
			"errors": error_count,
			"warnings": warn_count,
			"plugins": [str(plugin.get("id")) for plugin in plugins],
			"issues": issues,
		}
		print(json.dumps(summary, indent=2))
	elif issues:
		print(f"Found {error_count} errors and {warn_count} warnings.")

	if error_count > 0:
		raise SystemExit(1)
	if args.fail_on_warn and warn_count > 0:
		raise SystemExit(1)


if __name__ == "__main__":
	main()
