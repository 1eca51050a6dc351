# Standard Library
import json


DEFAULT_CONFIG: dict[str, object] = {
	"extensions": ".cs",
	"only": [],
	"enable": [],
	"disable": [],
	"plugin_paths": [],
}

LIST_KEYS = ("only", "enable", "disable", "plugin_paths")


#============================================


def load_config(config_file: str | None) -> dict[str, object]:
	"""
	Load lint settings from JSON or fall back to defaults.

	Keys present in the file replace the defaults. Unknown keys are
	rejected so typos do not silently disable a setting.

	Args:
		config_file: Optional path to a JSON settings file.

	Returns:
		dict[str, object]: Settings dict.
	"""
	config: dict[str, object] = {
		key: list(value) if isinstance(value, list) else value
		for key, value in DEFAULT_CONFIG.items()
	}
	if config_file is None:
		return config

	with open(config_file, "r", encoding="utf-8") as handle:
		data = json.load(handle)
	if not isinstance(data, dict):
		raise ValueError(f"Config must be a JSON object: {config_file}")

	for key, value in data.items():
		if key not in DEFAULT_CONFIG:
			raise ValueError(f"Unknown config key: {key}")
		if key in LIST_KEYS:
			if not isinstance(value, list):
				raise ValueError(f"Config key {key} must be a list")
			value = [str(item) for item in value]
		else:
			value = str(value)
		config[key] = value
	return config


#============================================


def split_csv(values: list[str]) -> set[str]:
	"""
	Split comma-separated lists into a set.

	Args:
		values: List of CSV strings.

	Returns:
		set[str]: Normalized ids.
	"""
	items: set[str] = set()
	for value in values:
		for raw in value.split(","):
			item = raw.strip()
			if item:
				items.add(item)
	return items


#============================================


def normalize_extensions(extensions: str) -> list[str]:
	"""
	Normalize comma-separated extensions into lowercase dotted form.
	"""
	normalized: list[str] = []
	for raw in extensions.split(","):
		ext = raw.strip().lower()
		if not ext:
			continue
		if not ext.startswith("."):
			ext = f".{ext}"
		normalized.append(ext)
	return normalized
