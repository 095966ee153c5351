"""Муравьиный алгоритм для задачи коммивояжера на плоскости.

Пакет предоставляет:
- aco_tsp.cities: класс City, матрица расстояний CityMap
- aco_tsp.colony: классы Ant, AntColony, ACOParams
- aco_tsp.cli: CLI для запуска из терминала
"""
from .cities import DEFAULT_CITIES, City, CityMap, euclidean
from .colony import ACOParams, Ant, AntColony, Choice, DegenerateInputError, RunResult

__all__ = [
    "City", "CityMap", "DEFAULT_CITIES", "euclidean",
    "AntColony", "Ant", "ACOParams", "Choice", "RunResult", "DegenerateInputError",
]
