# src/retro_chip8/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
アプリケーションを初期化し、メインウィンドウを起動します。
"""
import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import MachineConfig
from .main_window import MainWindow


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 virtual machine")
    parser.add_argument("rom", nargs="?", help="ROM image to load on startup")
    parser.add_argument("-c", "--config", help="YAML system config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ConfigLoader().load_from_file(args.config) if args.config else MachineConfig()

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(config)
    if args.rom:
        main_win.load_rom(args.rom)
        main_win.run_machine()
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
