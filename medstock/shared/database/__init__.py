from .models import Medicine, Sale

__all__ = ["Medicine", "Sale"]
