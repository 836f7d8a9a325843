from chicken_invaders.models.entity import Bullet, Chicken, Entity, Player
from chicken_invaders.models.explosion import Explosion
from chicken_invaders.models.power_up import PowerUp, PowerUpSystem, PowerUpType
from chicken_invaders.models.factory import EntityFactory
from chicken_invaders.models.wave import WaveDirector

__all__ = [
    "Bullet", "Chicken", "Entity", "Player",
    "Explosion",
    "PowerUp", "PowerUpSystem", "PowerUpType",
    "EntityFactory",
    "WaveDirector",
]
