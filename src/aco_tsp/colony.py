from __future__ import annotations

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass

from .cities import City, CityMap

# Нижняя граница расстояния для эвристики 1/d (совпадающие города)
MIN_DISTANCE = 1e-6


class DegenerateInputError(ValueError):
    '''Колонию нельзя построить из переданных данных'''


@dataclass(slots=True)
class ACOParams:
    '''
    Параметры алгоритма муравьиной колонии

    Attributes:
        alpha: важность феромона
        beta: важность эвристической информации (обратного расстояния)
        rho: коэффициент испарения феромона (0 <= rho <= 1)
        q: масштаб феромона, откладываемого муравьем
    '''
    alpha: float = 1.0
    beta: float = 2.0
    rho: float = 0.5
    q: float = 100.0

    def validate(self) -> None:
        if not all(math.isfinite(v) for v in (self.alpha, self.beta, self.rho, self.q)):
            raise DegenerateInputError("Параметры должны быть конечными числами.")
        if self.alpha < 0 or self.beta < 0:
            raise DegenerateInputError("alpha и beta должны быть >= 0.")
        if not 0.0 <= self.rho <= 1.0:
            raise DegenerateInputError("rho должно лежать в [0, 1].")
        if self.q <= 0:
            raise DegenerateInputError("q должно быть > 0.")


@dataclass(slots=True)
class Ant:
    '''
    Муравей одной итерации

    Attributes:
        tour: посещенные города по порядку
        visited: флаги посещения, индексированные номером города
    '''
    tour: list[int]
    visited: list[bool]

    @classmethod
    def spawn(cls, start: int, n: int) -> Ant:
        visited = [False] * n
        visited[start] = True
        return cls(tour=[start], visited=visited)

    @property
    def current(self) -> int:
        return self.tour[-1]

    def visit(self, city: int) -> None:
        if self.visited[city]:
            raise ValueError(f"Город {city} уже посещен.")
        self.tour.append(city)
        self.visited[city] = True

    def is_complete(self) -> bool:
        return len(self.tour) == len(self.visited)


@dataclass(slots=True, frozen=True)
class Choice:
    '''
    Результат выбора следующего города

    Attributes:
        city: выбранный город
        fallback: True, если все веса нулевые и сработал резервный выбор
    '''
    city: int
    fallback: bool = False


@dataclass(slots=True)
class RunResult:
    '''
    Результат выполнения алгоритма муравьиной колонии

    Attributes:
        best_tour: лучший найденный тур (последовательность городов)
        best_cost: длина лучшего тура
        iterations: количество выполненных итераций
        fallbacks: сколько раз сработал резервный выбор города
    '''
    best_tour: list[int]
    best_cost: float
    iterations: int
    fallbacks: int = 0


class AntColony:
    '''
    Алгоритм муравьиной колонии для задачи коммивояжера на плоскости

    Колония владеет матрицей расстояний (через CityMap), матрицей эвристики
    и матрицей феромонов. Муравьи создаются на каждую итерацию заново и
    ссылок на колонию не хранят.

    Attributes:
        g: города и матрица расстояний
        params: параметры алгоритма (ACOParams)
        n_ants: количество муравьев в одной итерации
        rng: генератор случайных чисел (по умолчанию random.Random(seed))
        verbose: вывод отладочной информации

    Требуется хотя бы два несовпадающих города: если все города в одной
    точке, колония не строится (DegenerateInputError)
    '''
    def __init__(self, cities: Sequence[City], params: ACOParams | None = None, *,
                 n_ants: int = 10, seed: int | None = None, rng: random.Random | None = None,
                 verbose: bool = False) -> None:
        if len(cities) < 2:
            raise DegenerateInputError("Нужно как минимум 2 города.")
        if n_ants < 1:
            raise DegenerateInputError("Нужен как минимум 1 муравей.")
        self.params = params or ACOParams()
        self.params.validate()
        self.g = CityMap(cities)
        if not any(x > 0.0 for row in self.g.d for x in row):
            raise DegenerateInputError("Нужно как минимум 2 различных города.")
        self.n_ants = n_ants
        self.rng = rng if rng is not None else random.Random(seed)
        self.verbose = verbose
        n = self.g.n
        self.eta = [[0.0 if i == j else 1.0 / max(self.g.cost(i, j), MIN_DISTANCE)
                     for j in range(n)] for i in range(n)]
        self.tau = [[0.0] * n for _ in range(n)]

    def run(self, n_iterations: int = 100) -> RunResult:
        '''
        Запуск алгоритма: n_iterations раз {муравьи -> туры -> феромоны},
        затем еще одна партия муравьев без обновления феромонов.
        Возвращает лучший тур среди всех увиденных
        '''
        if n_iterations < 0:
            raise DegenerateInputError("Число итераций должно быть >= 0.")
        best_tour: list[int] = []
        best_cost = math.inf
        fallbacks = 0

        if self.verbose:
            print("=== Параметры ===", self.params, f"муравьев={self.n_ants}")
            print("Матрица расстояний:")
            [print([round(x, 2) for x in row]) for row in self.g.d]
            print("Начальные феромоны:")
            [print([round(x, 3) for x in row]) for row in self.tau]
            print()

        for it in range(1, n_iterations + 1):
            ants = self.initialize_ants()
            fallbacks += self.ants_move(ants)
            best_tour, best_cost = self._pick_best(ants, best_tour, best_cost)
            self.update_pheromones(ants)

            if self.verbose and (it <= 3 or it > n_iterations - 3):
                print(f"Итерация {it}: лучший {best_tour}, длина={best_cost}")
                print("Феромоны:")
                [print([round(x, 3) for x in row]) for row in self.tau]

        # Финальная партия только для отбора лучшего тура
        ants = self.initialize_ants()
        fallbacks += self.ants_move(ants)
        best_tour, best_cost = self._pick_best(ants, best_tour, best_cost)

        return RunResult(best_tour=list(best_tour), best_cost=best_cost,
                         iterations=n_iterations, fallbacks=fallbacks)

    def initialize_ants(self, rng: random.Random | None = None) -> list[Ant]:
        '''Создает n_ants муравьев в случайных стартовых городах (с повторениями)'''
        rng = self.rng if rng is None else rng
        n = self.g.n
        return [Ant.spawn(rng.randrange(n), n) for _ in range(self.n_ants)]

    def next_city(self, ant: Ant, rng: random.Random | None = None) -> Choice:
        '''
        Выбор следующего города рулеточным методом

        Вес непосещенного города i из текущего c: tau[c][i]^alpha * eta[c][i]^beta.
        Города перебираются в порядке индексов; возвращается первый, на котором
        накопленный вес достигает случайного порога из [0, total).
        Если все веса нулевые, возвращается последний непосещенный город
        с fallback=True

        Attributes:
            ant: муравей с непустым и незавершенным туром
            rng: генератор (по умолчанию генератор колонии)
        Returns:
            Choice с номером города
        '''
        if not ant.tour or ant.is_complete():
            raise ValueError("Тур муравья пуст или уже завершен.")
        rng = self.rng if rng is None else rng
        cur = ant.current
        candidates = [j for j in range(self.g.n) if not ant.visited[j]]
        weights = [self._weight(cur, j) for j in candidates]

        total = sum(weights)
        if not math.isfinite(total):
            peak = max(weights)
            if math.isinf(peak):
                weights = [1.0 if math.isinf(w) else 0.0 for w in weights]
            else:
                weights = [w / peak for w in weights]
            total = sum(weights)

        if total <= 0.0:
            return Choice(candidates[-1], fallback=True)

        roulette = rng.random() * total
        cumulative = 0.0
        for j, w in zip(candidates, weights):
            cumulative += w
            if w > 0.0 and cumulative >= roulette:
                return Choice(j)
        # накопленная сумма недобрала до порога из-за округления
        return Choice(next(j for j, w in zip(reversed(candidates), reversed(weights)) if w > 0.0))

    def ants_move(self, ants: Sequence[Ant], rng: random.Random | None = None) -> int:
        '''
        Достраивает туры всех муравьев до полного обхода.
        Возвращает число резервных выборов
        '''
        fallbacks = 0
        for ant in ants:
            while not ant.is_complete():
                choice = self.next_city(ant, rng)
                ant.visit(choice.city)
                fallbacks += choice.fallback
        return fallbacks

    def update_pheromones(self, ants: Sequence[Ant]) -> None:
        '''Испарение по всей матрице, затем симметричное откладывание по турам'''
        keep = 1.0 - self.params.rho
        for row in self.tau:
            for j in range(len(row)):
                row[j] *= keep

        q = self.params.q
        for ant in ants:
            length = self.tour_length(ant.tour)
            if length <= 0.0:
                continue
            amount = q / length
            for a, b in zip(ant.tour, ant.tour[1:]):
                self.tau[a][b] += amount
                self.tau[b][a] += amount

    def tour_length(self, tour: Sequence[int]) -> float:
        return self.g.path_length(tour)

    def _weight(self, i: int, j: int) -> float:
        try:
            t = self.tau[i][j] ** self.params.alpha
            if t == 0.0:
                return 0.0
            return t * self.eta[i][j] ** self.params.beta
        except OverflowError:
            return math.inf

    def _pick_best(self, ants: Sequence[Ant], best_tour: list[int],
                   best_cost: float) -> tuple[list[int], float]:
        for ant in ants:
            cost = self.tour_length(ant.tour)
            if cost < best_cost:
                best_tour, best_cost = list(ant.tour), cost
        return best_tour, best_cost
