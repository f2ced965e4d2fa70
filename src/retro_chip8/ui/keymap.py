"""
ホスト側のキーボード入力を CHIP-8 の16進キーパッドに変換するモジュール。
Qtに依存しないため、UIなしでテスト可能です。
"""
from typing import Optional

from retro_chip8.common.types import KeyMap
from retro_chip8.config.models import DEFAULT_KEY_MAP

# @intent:responsibility キー名（大文字小文字を区別しない）から CHIP-8 キー番号への変換を行います。
class KeyMapper:
    def __init__(self, key_map: Optional[KeyMap] = None):
        source = key_map if key_map is not None else DEFAULT_KEY_MAP
        self._key_map: KeyMap = {name.upper(): key for name, key in source.items()}

    # @intent:responsibility 対応するCHIP-8キー番号を返します。割り当てがなければNoneを返します。
    def translate(self, key_text: str) -> Optional[int]:
        if not key_text:
            return None
        return self._key_map.get(key_text.upper())

    def bound_keys(self) -> KeyMap:
        return dict(self._key_map)
