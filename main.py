import sys

from asl_letter_detection.scripts.run_inference import main

# Run letter detection on the default webcam
sys.exit(main(sys.argv[1:]))
