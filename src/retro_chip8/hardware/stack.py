# retro_chip8/hardware/stack.py
"""
サブルーチン呼び出し（CALL/RET）の戻りアドレスを保持するスタック。
"""
from typing import List

from retro_chip8.common.errors import StackOverflowError

DEFAULT_STACK_DEPTH = 16


# @intent:responsibility 戻りアドレスを保持する深さ上限付きのスタックを提供します。
# @intent:rationale 上限を超える呼び出しは、無制限に伸長させずに StackOverflowError として検出します。
#                  空のスタックからのpopは0を返し、SPは0にクランプされます（アンダーフローしない）。
class Stack:
    def __init__(self, max_depth: int = DEFAULT_STACK_DEPTH):
        if not isinstance(max_depth, int) or max_depth <= 0:
            raise ValueError("Stack depth must be a positive integer.")
        self._max_depth = max_depth
        self._entries: List[int] = []

    @property
    def sp(self) -> int:
        return len(self._entries)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    # @intent:responsibility 16bitにクランプしたアドレスを積み、SPをインクリメントします。
    def push(self, address: int) -> None:
        if len(self._entries) >= self._max_depth:
            raise StackOverflowError(self._max_depth)
        self._entries.append(max(0x0000, min(0xFFFF, address)))

    # @intent:responsibility 最上位のアドレスを取り出します。空の場合は0を返します。
    def pop(self) -> int:
        if not self._entries:
            return 0x0000
        return self._entries.pop()

    # @intent:responsibility 指定インデックスのエントリを返します。一度も書き込まれていない位置は0です。
    def peek(self, index: int) -> int:
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return 0x0000

    def entries(self) -> List[int]:
        return list(self._entries)

    def reset(self) -> None:
        self._entries = []
