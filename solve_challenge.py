#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# archivo principal (mínimo)

import sys

from rootme.run import main

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass
