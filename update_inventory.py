import argparse

from inventory_recon.logger import setup_logger
from inventory_recon.pipelines.inventory import InventoryPipeline


def run_process(test_mode: bool = False):
    """Runs the inventory reconciliation pipeline end to end."""
    setup_logger()
    InventoryPipeline(test_mode=test_mode).run()


def main():
    parser = argparse.ArgumentParser(
        description="Reconcile FBA, AWD, 3PL and home inventory into a dated snapshot."
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Save outputs but skip the webhook post.",
    )
    args = parser.parse_args()
    run_process(test_mode=args.test)


if __name__ == "__main__":
    main()
