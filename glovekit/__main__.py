import logging
import sys

from glovekit.scripts.glove_standalone import main

logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.INFO)
sys.exit(main())
