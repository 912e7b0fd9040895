# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

import os
import sys

# make the src layout importable without installing the package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
