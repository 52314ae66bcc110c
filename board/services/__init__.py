# board/services/__init__.py
from .board_service import BoardService

__all__ = ['BoardService']
