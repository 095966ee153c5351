from __future__ import annotations

import argparse

from .cities import DEFAULT_CITIES
from .colony import ACOParams, AntColony, DegenerateInputError


def build_argparser() -> argparse.ArgumentParser:
    '''Создаёт парсер аргументов командной строки'''
    p = argparse.ArgumentParser(
        prog="aco-tsp",
        description="Муравьиный алгоритм (ACO) для TSP на фиксированном наборе городов.",
    )
    aco = p.add_argument_group("Параметры ACO")
    aco.add_argument("--ants", type=int, default=10, help="Количество муравьёв")
    aco.add_argument("--alpha", type=float, default=1.0, help="Влияние феромона")
    aco.add_argument("--beta", type=float, default=2.0, help="Влияние эвристики 1/d")
    aco.add_argument("--rho", type=float, default=0.5, help="Испарение (0..1)")
    aco.add_argument("--q", type=float, default=100.0, help="Масштаб депонирования")
    aco.add_argument("--iters", type=int, default=100, help="Число итераций")
    aco.add_argument("--seed", type=int, default=None, help="Seed для воспроизводимости")

    out = p.add_argument_group("Вывод")
    out.add_argument("--verbose", action="store_true", help="Печатать матрицы и ход итераций")

    return p


def main(argv: list[str] | None = None) -> int:
    '''Точка входа для aco-tsp'''
    parser = build_argparser()
    args = parser.parse_args(argv)

    if args.iters < 0:
        parser.error("--iters должно быть >= 0")

    params = ACOParams(alpha=args.alpha, beta=args.beta, rho=args.rho, q=args.q)
    try:
        colony = AntColony(DEFAULT_CITIES, params=params, n_ants=args.ants,
                           seed=args.seed, verbose=args.verbose)
    except DegenerateInputError as exc:
        parser.error(str(exc))
    res = colony.run(args.iters)

    print("Лучший маршрут:", res.best_tour)
    print("Длина маршрута:", res.best_cost)
    if args.verbose:
        print("Резервных выборов:", res.fallbacks)

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
