import argparse
import sys
import os
import time
import logging
from typing import Callable, List, Optional, TextIO

# Ensure project root is in path so we can import 'maze_lab' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.config import DELAY_DEFAULT, SIZE_DEFAULT, RunConfig
from maze_lab.core.errors import UnknownPolicy

logger = logging.getLogger("maze_lab")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Lab: generate a maze and race search algorithms through it")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Animate one solver, or two side by side")
    group = solve_parser.add_mutually_exclusive_group()
    group.add_argument("--algo", type=str, default="bfs", help="Solver to run (bfs, dfs)")
    group.add_argument("--compare", type=str, nargs=2, metavar=("FIRST", "SECOND"), help="Two solvers to race")
    solve_parser.add_argument("--size", type=int, default=SIZE_DEFAULT, help="Maze size (odd, 11-51)")
    solve_parser.add_argument("--delay", type=int, default=DELAY_DEFAULT, help="Milliseconds between steps (10-2000)")
    solve_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    solve_parser.add_argument("--nocolor", action="store_true", help="Disable ANSI colors")
    solve_parser.add_argument("--visual", action="store_true", help="Show a pygame window instead of the terminal")
    solve_parser.add_argument("--record", action="store_true", help="Record the window to mp4 (implies --visual)")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Run every solver headless and compare")
    bench_parser.add_argument("--size", type=int, default=51, help="Maze size (odd, 11-51)")
    bench_parser.add_argument("--seed", type=int, default=123, help="Seed of the first maze")
    bench_parser.add_argument("--runs", type=int, default=5, help="Number of mazes (seed, seed+1, ...)")

    return parser


def run_solve(config: RunConfig, stream: TextIO = None, sleep: Callable[[float], None] = time.sleep):
    from maze_lab.algo.dfs import generate
    from maze_lab.algo.solvers import create_solver
    from maze_lab.core.complexity import MazePostProcessor
    from maze_lab.run.driver import RunDriver

    config, issues = config.normalized()
    for issue in issues:
        logger.warning(f"ConfigurationError: {issue}")

    # Resolve solvers before doing any work so a typo fails fast
    engines = [create_solver(name) for name in config.solvers]

    seed = config.seed if config.seed is not None else int(time.time() * 1000)
    grid = generate(config.size, seed)
    logger.debug(f"Stats: {MazePostProcessor.calculate_stats(grid)}")

    driver = RunDriver(grid, engines)

    if config.visual:
        from maze_lab.viz.renderer import Renderer
        renderer = Renderer(driver, delay_ms=config.delay_ms, record=config.record)
        renderer.init_window()
        renderer.run_loop()
        results = driver.results()
        for res in results:
            logger.info(f"{res.name}: steps={res.steps} path={res.path_length or 'none'}")
        return results

    from maze_lab.viz.terminal import TerminalRenderer
    term = TerminalRenderer(use_color=config.color, stream=stream)

    term.banner(f"Maze size: {grid.size}x{grid.size}  |  Seed: {seed}  |  Delay: {config.delay_ms}ms")
    sleep(1.0)

    term.clear()
    results = driver.run(delay=config.delay_seconds, on_frame=term.render, sleep=sleep)

    # Brief pause before the reveal
    sleep(0.5)
    term.clear()
    term.render(driver.final_frames(), suffix=" ✓")
    term.summary(results)
    return results


def run_benchmark(size: int, seed: int, runs: int, stream: TextIO = None):
    from maze_lab.algo.dfs import generate
    from maze_lab.algo.solvers import SOLVERS
    from maze_lab.core.config import coerce_size

    stream = stream if stream is not None else sys.stdout
    size = coerce_size(size)
    totals = {key: [0, 0, 0, 0.0] for key in SOLVERS}

    for i in range(runs):
        grid = generate(size, seed + i)
        if grid.end not in grid.reachable():
            logger.warning(f"Seed {seed + i}: end is not reachable from start")

        for key, cls in SOLVERS.items():
            solver = cls()
            solver.init(grid, grid.start, grid.end)

            t_start = time.perf_counter()
            path = solver.run_all()
            duration = time.perf_counter() - t_start

            if path and not grid.validate_path(path):
                logger.warning(f"{solver.name} returned an invalid path on seed {seed + i}")

            total = totals[key]
            total[0] += solver.steps
            total[1] += len(path)
            total[2] += solver.visited_count
            total[3] += duration

    stream.write(f"\nSize: {size}x{size} | Mazes: {runs} | Seeds: {seed}..{seed + runs - 1}\n")
    stream.write(f"\n{'ALGORITHM':<20} | {'STEPS':<10} | {'PATH LEN':<10} | {'VISITED':<10} | {'TIME (ms)':<10}\n")
    stream.write("-" * 72 + "\n")
    n = max(runs, 1)
    for key, (steps, path_len, visited, duration) in totals.items():
        name = SOLVERS[key].name
        stream.write(f"{name:<20} | {steps / n:<10.1f} | {path_len / n:<10.1f} | {visited / n:<10.1f} | "
                     f"{duration * 1000 / n:<10.3f}\n")
    stream.flush()
    return totals


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "solve":
        solvers = tuple(args.compare) if args.compare else (args.algo,)
        config = RunConfig(
            size=args.size,
            delay_ms=args.delay,
            seed=args.seed,
            solvers=solvers,
            color=not args.nocolor,
            visual=args.visual,
            record=args.record,
        )
        try:
            run_solve(config)
        except UnknownPolicy as e:
            logger.error(str(e))
            return 2
        except KeyboardInterrupt:
            logger.info("Interrupted")
            return 130

    elif args.command == "benchmark":
        logger.info(f"Running Solver Benchmark (Size: {args.size}x{args.size}, Runs: {args.runs})...")
        run_benchmark(args.size, args.seed, args.runs)

    return 0


if __name__ == "__main__":
    sys.exit(main())
