"""Generation constants.

Re-exports all constants for convenient importing:
    from crudgen.constants import SAMPLE_EMAIL, INDENT
"""

from crudgen.constants.generation import *  # noqa: F403
from crudgen.constants.output import *  # noqa: F403
from crudgen.constants.models import *  # noqa: F403
