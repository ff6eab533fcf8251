"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, env_str


@dataclass
class _Settings:
    # アスペクト比比較（相対許容誤差）
    RATIO_TOLERANCE: float = 1e-5

    # バー領域クリア
    CLEAR_DEPTH: float = 1.0

    # Runner
    DEFAULT_FPS: int = 60
    LOG_LEVEL: str = "INFO"

    # Misc
    DEBUG_VIEWPORT: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - float は `env_float`、int は `env_int`、bool は `env_bool` を使用。
    - 許容誤差は正値、深度は 0..1 に丸める。
    """
    tol = env_float("LBX_RATIO_TOLERANCE", 1e-5, min_value=0.0)
    _settings.RATIO_TOLERANCE = tol if tol > 0.0 else 1e-5
    _settings.CLEAR_DEPTH = env_float("LBX_CLEAR_DEPTH", 1.0, min_value=0.0, max_value=1.0)

    _settings.DEFAULT_FPS = env_int("LBX_FPS", 60, min_value=1) or 60
    _settings.LOG_LEVEL = env_str("LBX_LOG_LEVEL", "INFO").upper()

    _settings.DEBUG_VIEWPORT = env_bool("LBX_DEBUG_VIEWPORT", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
