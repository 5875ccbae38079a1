"""Package operators for executing global package actions.

This module exports the npm operator used for every runtime version.
"""

from nvmctl.operators.npm import NpmError, NpmOperator

__all__ = ["NpmError", "NpmOperator"]
