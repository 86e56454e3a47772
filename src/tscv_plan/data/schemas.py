"""Column names and dtypes of the canonical cross-validation plan table."""

import polars as pl

ID_COL = "id"
KEY_COL = "key"

TRAINING = "training"
TESTING = "testing"
KEY_LEVELS = [TRAINING, TESTING]

KEY_DTYPE = pl.Enum(KEY_LEVELS)

# Columns every canonical plan table must carry
REQUIRED_PLAN_COLUMNS = (ID_COL, KEY_COL)
