from .normalizers import to_uppercase, to_lowercase, comparison_key

__all__ = ["to_uppercase", "to_lowercase", "comparison_key"]
