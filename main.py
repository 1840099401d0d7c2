import sys

from hand_overlay.app import main

if __name__ == '__main__':
    sys.exit(main())
