# retro_chip8/hardware/keypad.py
"""
16キーの入力デバイスと、Fx0A命令のためのキー入力待ちラッチ。
"""
from typing import List, Optional

from retro_chip8.common.errors import InvalidKeyError

NUM_KEYS = 16


# @intent:responsibility 16個のキーの押下状態と、ブロッキング読み出しのためのラッチを管理します。
# @intent:rationale キーイベントは状態を更新して押下キーを記録するだけとし、命令の完了処理はCPU側の単一の経路で行います。
#                  これにより同じ待機中の命令が二重に解決されることを防ぎます。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * NUM_KEYS
        self._awaiting = False
        self._pending_key: Optional[int] = None

    # @intent:responsibility キー番号が [0, 15] の範囲内であることを検証します。
    @staticmethod
    def _check_key(key: int) -> None:
        if not isinstance(key, int) or isinstance(key, bool) or not 0 <= key < NUM_KEYS:
            raise InvalidKeyError(key)

    # @intent:responsibility キーの押下状態を更新します。
    # @intent:post-condition 待機中に released->pressed の遷移があり、まだ何もラッチされていなければそのキーをラッチします。
    #                       遷移が発生した場合は True を返します。
    def set_key_state(self, key: int, pressed: bool) -> bool:
        self._check_key(key)
        previous = self._keys[key]
        self._keys[key] = bool(pressed)
        edge = not previous and bool(pressed)
        if edge and self._awaiting and self._pending_key is None:
            self._pending_key = key
        return edge

    def is_pressed(self, key: int) -> bool:
        self._check_key(key)
        return self._keys[key]

    def get_states(self) -> List[bool]:
        return list(self._keys)

    # @intent:responsibility キー入力待ちを開始します。以前にラッチされた値は破棄されます。
    def begin_await(self) -> None:
        self._awaiting = True
        self._pending_key = None

    @property
    def is_awaiting(self) -> bool:
        return self._awaiting

    @property
    def pending_key(self) -> Optional[int]:
        return self._pending_key

    # @intent:responsibility ラッチされたキーを取り出して待機を終了します。ラッチがなければNoneを返し、待機を継続します。
    def take_pending_key(self) -> Optional[int]:
        key = self._pending_key
        if key is None:
            return None
        self._pending_key = None
        self._awaiting = False
        return key

    def reset(self) -> None:
        self._keys = [False] * NUM_KEYS
        self._awaiting = False
        self._pending_key = None
