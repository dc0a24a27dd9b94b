##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
Mongostore's configuration.
"""

import os


APP_FILENAME: str = "app.yaml"
USER_HOME: str = os.path.expanduser("~")
MONGOSTORE_HOME: str = os.path.join(USER_HOME, ".mongostore")
DEFAULT_MODELS_DIR: str = os.path.join("app", "models")
