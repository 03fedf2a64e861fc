"""Write execution for rowmodel."""

from rowmodel.data.crud import CrudExecutor

__all__ = ["CrudExecutor"]
