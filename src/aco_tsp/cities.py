from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class City:
    '''
    Город (точка на плоскости)

    Attributes:
        x: абсцисса
        y: ордината
    '''
    x: float
    y: float

    def distance(self, other: City) -> float:
        return euclidean(self, other)


def euclidean(a: City, b: City) -> float:
    '''Евклидово расстояние между двумя городами'''
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)


# Задача по умолчанию: пять городов на диагонали
DEFAULT_CITIES: tuple[City, ...] = tuple(City(float(i), float(i)) for i in range(5))


class CityMap:
    '''
    Набор городов и матрица попарных расстояний

    Матрица `d[i][j]` считается один раз при создании и дальше не меняется.
    Гарантируется d[i][j] == d[j][i] и d[i][i] == 0
    '''

    def __init__(self, cities: Sequence[City]) -> None:
        n = len(cities)
        if n < 2:
            raise ValueError("Нужно как минимум 2 города.")
        self.n: int = n
        self.cities: tuple[City, ...] = tuple(cities)
        rows = [[0.0] * n for _ in range(n)]
        for i in range(n):
            for j in range(i + 1, n):
                rows[i][j] = rows[j][i] = euclidean(self.cities[i], self.cities[j])
        self.d: tuple[tuple[float, ...], ...] = tuple(tuple(row) for row in rows)

    def cost(self, i: int, j: int) -> float:
        return self.d[i][j]

    def path_length(self, tour: Sequence[int]) -> float:
        '''Длина маршрута (незамкнутого, без возврата в начало)'''
        total = 0.0
        for a, b in zip(tour, tour[1:]):
            total += self.d[a][b]
        return total

    def is_symmetric(self) -> bool:
        for i in range(self.n):
            if self.d[i][i] != 0.0:
                return False
            for j in range(i + 1, self.n):
                if self.d[i][j] != self.d[j][i]:
                    return False
        return True
