import argparse
import json
import random
import sys
import time
from pathlib import Path

from route_ga.controller import Controller
from route_ga.data import Instance, load_instance, load_tsplib_instances, shape_instance
from route_ga.engine import EngineConfig
from route_ga.exceptions import ConfigurationError, SelectionExhaustedError
from route_ga.evaluation import GenerationStats
from route_ga.shapes import SHAPES


CHECKPOINT_PATH = Path("checkpoints/route_state.json")


def save_checkpoint(model: Controller, path: Path = CHECKPOINT_PATH) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(model.to_state(), indent=2))


def load_checkpoint(path: Path = CHECKPOINT_PATH, rng: random.Random = None) -> Controller:
    state = json.loads(path.read_text())
    return Controller.from_state(state, rng=rng)


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def format_stats(stats: GenerationStats) -> str:
    line = (
        f"gen {stats.generation}: first={stats.first_length:8.2f} "
        f"best={stats.best_length:8.2f} avg={stats.mean_length:8.2f}"
    )
    if stats.gap != float("inf"):
        line += f" gap={stats.gap:6.2%}"
    return line


def load_tsp_source(path: Path, max_nodes: int = None) -> Instance:
    if not path.is_dir():
        return load_instance(path)
    instances = load_tsplib_instances(path, max_nodes=max_nodes, max_instances=1)
    if not instances:
        raise RuntimeError(
            f"No TSPLIB instances found in {path}. "
            "Place .tsp files with node coordinates there before running."
        )
    return instances[0]


def build_model(args) -> Controller:
    checkpoint = Path(args.checkpoint)
    if args.resume and checkpoint.exists():
        log(f"resuming from {checkpoint}")
        return load_checkpoint(checkpoint)
    if args.tsp:
        instance = load_tsp_source(Path(args.tsp), args.max_nodes)
    else:
        instance = shape_instance(args.shape)
    log(f"instance {instance.name}: {len(instance.points)} points, optimum={instance.optimum}")
    cfg = EngineConfig(
        population_size=args.population_size,
        crossover_chance=args.crossover_chance,
        mutation_chance=args.mutation_chance,
        random_seed=args.seed,
        max_selection_scans=args.max_selection_scans,
    )
    return Controller(cfg, instance.points, optimum=instance.optimum)


def run(args) -> None:
    checkpoint = Path(args.checkpoint)
    try:
        model = build_model(args)
    except ConfigurationError as e:
        log(f"invalid configuration: {e}")
        sys.exit(2)
    cfg = model.cfg
    log(
        f"population={cfg.population_size} crossover={cfg.crossover_chance} "
        f"mutation={cfg.mutation_chance}"
    )
    print(format_stats(model.stats()))
    if args.generations:
        log(f"running {args.generations} generations")
    else:
        log("running continuously; Ctrl+C to stop.")
    target = model.generation + args.generations if args.generations else None
    try:
        while target is None or model.generation < target:
            model.step()
            print(format_stats(model.stats()))
            save_checkpoint(model, checkpoint)
    except SelectionExhaustedError as e:
        log(f"stopping at generation {model.generation}: {e}")
        save_checkpoint(model, checkpoint)
    except KeyboardInterrupt:
        save_checkpoint(model, checkpoint)
        print("Interrupted. Checkpoint saved.")
        return
    best, fitness = model.best()
    log(f"best route length={1.0 / fitness:.2f}: {best}")


def data(args) -> None:
    checkpoint = Path(args.checkpoint)
    if not checkpoint.exists():
        print("No checkpoint found; run `route-ga run` first.")
        return
    model = load_checkpoint(checkpoint)
    stats = model.stats()
    best, fitness = model.best()
    print(f"generation={model.generation}, points={len(model.points)}, population={len(model.population)}")
    print(format_stats(stats))
    print(f"best fitness={fitness:.6f} route={best}")


def main():
    parser = argparse.ArgumentParser(description="Route GA CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run / resume the route search")
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument("--shape", choices=sorted(SHAPES), default="dodecagon")
    source.add_argument("--tsp", help="TSPLIB .tsp file, or a directory (first instance is used)")
    run_parser.add_argument("--population-size", type=int, default=100)
    run_parser.add_argument("--crossover-chance", type=float, default=0.30)
    run_parser.add_argument("--mutation-chance", type=float, default=0.05)
    run_parser.add_argument("--generations", type=int, default=0, help="0 runs until interrupted")
    run_parser.add_argument("--seed", type=int, default=None)
    run_parser.add_argument("--max-selection-scans", type=int, default=10_000)
    run_parser.add_argument("--max-nodes", type=int, default=None, help="skip larger instances when --tsp is a directory")
    run_parser.add_argument("--checkpoint", default=str(CHECKPOINT_PATH))
    run_parser.add_argument("--resume", action="store_true")
    run_parser.set_defaults(func=run)

    data_parser = subparsers.add_parser("data", help="Inspect current checkpoint")
    data_parser.add_argument("--checkpoint", default=str(CHECKPOINT_PATH))
    data_parser.set_defaults(func=data)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
