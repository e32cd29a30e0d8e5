from .tool_thread import ToolThreadCommand

__all__ = ["ToolThreadCommand"]
