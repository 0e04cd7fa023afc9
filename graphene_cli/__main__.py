import faulthandler
import sys

from graphene_cli.cli.runner import main

faulthandler.enable()

if __name__ == "__main__":
    sys.exit(main())
