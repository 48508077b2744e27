from concurrent.futures import ThreadPoolExecutor
from threading import Barrier

WORKERS = 8
ROUNDS = 50


def test_process_from_many_threads(cl):
    seen = {index: [] for index in range(WORKERS)}
    barrier = Barrier(WORKERS)

    def handler(values):
        seen[values.context].append((values["name"], values["count"], values["-q"]))

    cl.register_command(handler, "test:<string-name>", "-n <int-count>", "[-q]")

    def worker(index):
        barrier.wait()
        args = [f"test:worker{index}", "-n", str(index)]
        if index % 2:
            args.append("-q")
        for _ in range(ROUNDS):
            cl.process(args, context=index)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(worker, range(WORKERS)))

    for index, calls in seen.items():
        assert calls == [(f"worker{index}", index, bool(index % 2))] * ROUNDS


def test_global_options_from_many_threads(cl):
    seen = {index: [] for index in range(WORKERS)}
    barrier = Barrier(WORKERS)

    cl.register_global_option(
        lambda values: seen[values.context].append(values["env"]),
        "--env:<string-env>",
    )
    cl.register_command(lambda values: None, "~")

    def worker(index):
        barrier.wait()
        for _ in range(ROUNDS):
            cl.process([f"--env:env{index}"], context=index)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(worker, range(WORKERS)))

    for index, envs in seen.items():
        assert envs == [f"env{index}"] * ROUNDS
