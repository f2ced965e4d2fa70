"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import Dict

# @intent:data_structure ホスト側のキー名とCHIP-8キー番号(0x0-0xF)を対応付ける辞書の型エイリアス。
# Config, UI の両レイヤーで共通して使用されます。
KeyMap = Dict[str, int]
