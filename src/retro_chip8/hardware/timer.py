# retro_chip8/hardware/timer.py
"""
8bitの飽和カウンタとして動作するタイマー（ディレイタイマー、サウンドタイマー）。
"""


# @intent:responsibility 外部から一定周期（60Hz）でデクリメントされる8bitカウンタを提供します。
class Timer:
    def __init__(self):
        self._value = 0

    # @intent:responsibility タイマー値を設定します。範囲外の値は [0, 255] にクランプされます。
    def set_value(self, value: int) -> None:
        self._value = max(0x00, min(0xFF, value))

    def get_value(self) -> int:
        return self._value

    # @intent:responsibility タイマーを1カウント減らします。0未満にはなりません。
    def tick(self) -> None:
        self._value = max(0, self._value - 1)

    # @intent:responsibility タイマーが動作中（値が0より大きい）かどうかを返します。
    # @intent:rationale サウンドタイマーの場合、ホストはこの値でブザーの鳴動を判断します。
    def is_active(self) -> bool:
        return self._value > 0

    def reset(self) -> None:
        self._value = 0
