"""Helios 启动器账户与会话核心。"""

__version__ = "1.0.0"
