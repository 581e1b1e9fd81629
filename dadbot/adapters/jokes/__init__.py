"""Joke API adapters."""

from dadbot.adapters.jokes.icanhazdadjoke import JokeClient

__all__ = ["JokeClient"]
