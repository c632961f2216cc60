# Todo records backed by the Supabase data API
from .models import Todo
from .service import TodoService

__all__ = ["Todo", "TodoService"]
