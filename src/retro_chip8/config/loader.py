import yaml
from typing import Any, Dict

from retro_chip8.common.errors import ConfigError
from .models import MachineConfig, DisplayPalette, DEFAULT_KEY_MAP

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r', encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> MachineConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ConfigError("System config must be a mapping.")

        defaults = MachineConfig()

        # Parse Palette
        palette_data = data.get("palette", {})
        palette = DisplayPalette(
            background=self._parse_byte(palette_data.get("background", defaults.palette.background)),
            foreground=self._parse_byte(palette_data.get("foreground", defaults.palette.foreground)),
        )

        # Parse Key Map
        key_map = dict(DEFAULT_KEY_MAP)
        for host_key, chip_key in data.get("key_map", {}).items():
            value = self._parse_int(chip_key)
            if not 0 <= value <= 0xF:
                raise ConfigError(f"Invalid CHIP-8 key {chip_key!r} for host key {host_key!r}")
            key_map[str(host_key).upper()] = value

        seed = data.get("random_seed")

        config = MachineConfig(
            cpu_hz=self._parse_positive(data.get("cpu_hz", defaults.cpu_hz), "cpu_hz"),
            timer_hz=self._parse_positive(data.get("timer_hz", defaults.timer_hz), "timer_hz"),
            sprite_wrap=bool(data.get("sprite_wrap", defaults.sprite_wrap)),
            stack_depth=self._parse_positive(data.get("stack_depth", defaults.stack_depth), "stack_depth"),
            random_seed=None if seed is None else self._parse_int(seed),
            display_scale=self._parse_positive(data.get("display_scale", defaults.display_scale), "display_scale"),
            palette=palette,
            key_map=key_map,
        )
        return config

    def _parse_positive(self, value: Any, name: str) -> int:
        result = self._parse_int(value)
        if result <= 0:
            raise ConfigError(f"{name} must be a positive integer: {value}")
        return result

    def _parse_byte(self, value: Any) -> int:
        result = self._parse_int(value)
        if not 0 <= result <= 0xFF:
            raise ConfigError(f"Invalid color level: {value}")
        return result

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format: {value}")
