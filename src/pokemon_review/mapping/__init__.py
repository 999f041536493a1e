from .mapper import to_dto, to_dtos, to_entity

__all__ = ["to_dto", "to_dtos", "to_entity"]
