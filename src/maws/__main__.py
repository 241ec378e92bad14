from maws.cli import run_entrypoint

run_entrypoint()
