"""
Shared constants across seeding and serving
"""

# Store layout
DEFAULT_NAMESPACE = "test"
DEFAULT_SET_NAME = "creditcard"

# Stored record field names
USER_ID_FIELD = "UserID"
SET_NAME_FIELD = "set_name"
RECORD_ID_FIELD = "ID"
AMOUNT_FIELD = "AmountBin"
LABEL_FIELD = "ClassBin"
TIME_FIELD = "TimeBin"

# Component fields are v0, v1, ... (one per PCA column)
COMPONENT_PREFIX = "v"

# Model input: 28 components + log(amount)
FEATURE_VECTOR_LENGTH = 29
DEFAULT_FEATURE_VALUE = 0.0

# Ground-truth / prediction labels
FRAUD_LABEL = "1"
LEGIT_LABEL = "0"
VALID_LABELS = (LEGIT_LABEL, FRAUD_LABEL)

# Decision rule
FRAUD_THRESHOLD = 0.5
