"""
CHIP-8命令セット実装パッケージ。
"""
import logging

from retro_chip8.core.snapshot import Operation
from retro_chip8.core.state import Chip8CpuState
from retro_chip8.arch.chip8.peripherals import Chip8Peripherals
from .base import dispatch_pattern
from .maps import DECODE_MAP, EXECUTE_MAP

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8の命令語をデコードします。
def decode_opcode(opcode: int) -> Operation:
    """
    16bitの命令語をデコードし、Operationオブジェクトを返します。
    未定義の命令語は "UNKNOWN" として返されます（実行時は何もしません）。
    """
    decoder = DECODE_MAP.get(dispatch_pattern(opcode))
    if decoder:
        return decoder(opcode)
    return Operation(opcode, dispatch_pattern(opcode), "UNKNOWN", [f"#{opcode:04X}"])

# @intent:responsibility デコードされたCHIP-8命令を実行します。
# @intent:rationale 未定義命令はエラーにせず無視します（PCは呼び出し元で既に進められています）。
def execute_instruction(operation: Operation, state: Chip8CpuState, hw: Chip8Peripherals) -> None:
    """
    デコードされた命令を実行し、CPUの状態と周辺ハードウェアを変更します。
    """
    executor = EXECUTE_MAP.get(operation.pattern)
    if executor:
        executor(state, hw, operation)
    else:
        logger.debug("Ignoring unrecognized opcode %s", operation.opcode_hex)
