from sqlalchemy.ext.asyncio import AsyncSession

from pokemon_review.models.pokemon import Pokemon
from .base_repository import BaseRepository


class PokemonRepository(BaseRepository[Pokemon]):
    """Read access to pokemon; reviews attach to the records returned here."""

    def __init__(self, db: AsyncSession):
        super().__init__(Pokemon, db)

    async def get_pokemons(self) -> list[Pokemon]:
        return await self.list_all(order_by="id")

    async def get_pokemon(self, pokemon_id: int) -> Pokemon | None:
        return await self.get_by_id(pokemon_id)

    async def pokemon_exists(self, pokemon_id: int) -> bool:
        return await self.exists(pokemon_id)
