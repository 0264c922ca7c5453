import argparse
import sys
import logging

from fitts_capture.acquisition import SimulatedSource
from fitts_capture.configs import AppSettings, package_version
from fitts_capture.core import BlockRunner, SessionRecorder
from fitts_capture.factories import create_session_sinks

def main(argv=None):
    # 1. Command-Line Arguments
    parser = argparse.ArgumentParser(
        prog="fitts_capture",
        description="Run a simulated Fitts' Law block and record its data logs, trials and sequences."
    )
    parser.add_argument("--participant", required=True, help="Participant id; rows are written under <data_dir>/<participant>.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the simulated participant.")
    parser.add_argument("--pupil-labs", action="store_true", help="Simulate Pupil Labs pupil metrics.")
    args = parser.parse_args(argv)

    # 2. Load Configuration
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"Configuration Error: {e}")
        sys.exit(1)

    if args.seed is not None:
        settings.simulation.seed = args.seed
    if args.pupil_labs:
        settings.simulation.pupil_labs = True

    # 3. Setup Logging
    logging.basicConfig(
        level=settings.logging.level,
        format=settings.logging.format,
        stream=sys.stdout
    )
    logger = logging.getLogger("main")
    logger.info(f"Starting Fitts Capture v{package_version()}")

    # 4. Session Components
    participant_dir = settings.data_dir / args.participant
    participant_dir.mkdir(parents=True, exist_ok=True)

    source = SimulatedSource(settings.simulation)
    sinks = create_session_sinks(settings, participant_dir)

    # 5. Run
    try:
        with SessionRecorder(sinks, test_block_id=settings.block_id) as recorder:
            sequences = BlockRunner(source, recorder, settings.experiment).run()
    except Exception:
        logger.exception("Fatal error while recording the block")
        sys.exit(1)

    logger.info(f"Recorded {len(sequences)} sequences for participant {args.participant} in {participant_dir}")

if __name__ == "__main__":
    main()
