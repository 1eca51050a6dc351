# Standard Library
import importlib
import importlib.util
import os

# Local modules
import region_lint.plugins


#============================================


def _register_module(registry: "Registry", module: object) -> None:
	"""
	Register a plugin module by reading its metadata.

	Args:
		registry: Plugin registry.
		module: Imported module object.
	"""
	for attr in ("PLUGIN_ID", "PLUGIN_NAME", "run"):
		if not hasattr(module, attr):
			raise ValueError(f"Plugin module {module!r} is missing {attr}")
	registry.register(
		{
			"id": str(module.PLUGIN_ID),
			"name": str(module.PLUGIN_NAME),
			"run": module.run,
			"default_enabled": bool(getattr(module, "DEFAULT_ENABLED", True)),
		}
	)


#============================================


class Registry:
	"""Lint plugin registry, kept in registration order."""

	def __init__(self) -> None:
		self._plugins: dict[str, dict[str, object]] = {}
		self._order: list[str] = []

	def register(self, plugin: dict[str, object]) -> None:
		"""
		Register a plugin.

		Args:
			plugin: Plugin metadata dict.
		"""
		plugin_id = str(plugin.get("id"))
		if plugin_id in self._plugins:
			raise ValueError(f"Duplicate plugin id: {plugin_id}")
		self._plugins[plugin_id] = plugin
		self._order.append(plugin_id)

	def list_plugins(self) -> list[dict[str, object]]:
		return [self._plugins[plugin_id] for plugin_id in self._order]

	def resolve_plugins(
		self,
		only_ids: set[str],
		enable_ids: set[str],
		disable_ids: set[str],
	) -> list[dict[str, object]]:
		"""
		Resolve the list of plugins to run.

		Args:
			only_ids: When set, use only these plugin ids.
			enable_ids: Plugin ids to enable in addition to defaults.
			disable_ids: Plugin ids to disable.

		Returns:
			list[dict[str, object]]: Enabled plugins in registration order.

		Raises:
			ValueError: If any id is not registered.
		"""
		unknown = sorted((only_ids | enable_ids | disable_ids) - set(self._plugins))
		if unknown:
			raise ValueError(f"Unknown plugin id(s): {', '.join(unknown)}")

		if only_ids:
			enabled = set(only_ids)
		else:
			enabled = {
				plugin_id
				for plugin_id in self._order
				if self._plugins[plugin_id].get("default_enabled") is True
			}
			enabled.update(enable_ids)
		enabled.difference_update(disable_ids)

		return [self._plugins[plugin_id] for plugin_id in self._order if plugin_id in enabled]

	def load_plugin_path(self, path: str) -> None:
		"""
		Load and register a plugin from a file path.

		Args:
			path: Path to a plugin module.
		"""
		abs_path = os.path.abspath(path)
		module_name = f"region_lint_plugin_{len(self._plugins)}"
		spec = importlib.util.spec_from_file_location(module_name, abs_path)
		if spec is None or spec.loader is None:
			raise ValueError(f"Unable to load plugin module: {path}")
		module = importlib.util.module_from_spec(spec)
		spec.loader.exec_module(module)
		_register_module(self, module)


#============================================


def build_registry() -> Registry:
	"""
	Build a registry with the built-in plugins.

	Returns:
		Registry: Plugin registry.
	"""
	registry = Registry()
	for module_name in region_lint.plugins.BUILTIN_PLUGINS:
		module = importlib.import_module(module_name)
		_register_module(registry, module)
	return registry
