"""
例外定義モジュール。

エミュレータコアが送出する例外の階層を定義します。
組み込み例外（IndexError, ValueErrorなど）も多重継承しているため、
ホスト側は既存の例外ハンドリングのままでも捕捉できます。
"""


# @intent:responsibility CHIP-8コアが送出する全ての例外の基底クラスです。
class Chip8Error(Exception):
    pass


# @intent:responsibility アドレス空間 [0x000, 0xFFF] の外側へのアクセスを表します。Machineを停止させる致命的エラーです。
class OutOfBoundsError(Chip8Error, IndexError):
    def __init__(self, address: int, message: str = ""):
        self.address = address
        super().__init__(message or f"Memory address {address:#05x} out of bounds.")


# @intent:responsibility 範囲 [0, 15] 外のキー番号を表します。境界で拒否され、状態は変化しません。
class InvalidKeyError(Chip8Error, ValueError):
    def __init__(self, key: int):
        self.key = key
        super().__init__(f"Key {key!r} is not a valid keypad index (0x0-0xF).")


# @intent:responsibility コールスタックの深さ上限超過を表します。OutOfBoundsErrorと同様に致命的です。
class StackOverflowError(Chip8Error, OverflowError):
    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Call stack overflow: maximum depth of {max_depth} exceeded.")


# @intent:responsibility ROMイメージが不正（空、またはメモリに収まらない）であることを表します。
class RomLoadError(Chip8Error, ValueError):
    pass


# @intent:responsibility システム構成ファイルの内容が不正であることを表します。
class ConfigError(Chip8Error, ValueError):
    pass
