# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
CHIP-8のROMはヘッダを持たない生のバイナリイメージです。
"""
import logging
from pathlib import Path
from typing import Union

from retro_chip8.common.errors import RomLoadError
from retro_chip8.core.state import PROGRAM_START
from retro_chip8.hardware.memory import MEMORY_SIZE

logger = logging.getLogger(__name__)

# @intent:constant プログラム領域（0x200-0xFFF）に収まる最大のROMサイズ。
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START

class RomLoader:
    """
    ROMファイルを読み込み、メモリに収まることを検証してバイト列を返すローダー。
    """
    def load_rom_file(self, file_path: Union[str, Path]) -> bytes:
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise RomLoadError(f"Failed to read ROM file {file_path}: {e}") from e

        self.validate(data)
        logger.info("Read ROM '%s' (%d bytes)", file_path, len(data))
        return data

    # @intent:responsibility ROMイメージがプログラム領域に収まることを、メモリを変更する前に検証します。
    def validate(self, data: bytes) -> None:
        if not data:
            raise RomLoadError("ROM image is empty.")
        if len(data) > MAX_ROM_SIZE:
            raise RomLoadError(
                f"ROM image is {len(data)} bytes; at most {MAX_ROM_SIZE} bytes fit at {PROGRAM_START:#05x}."
            )
