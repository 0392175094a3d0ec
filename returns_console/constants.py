# Money
MONEY_PLACES = 2
CURRENCY_CODE = "SAR"

# Logging
LOGGER_NAME = "returns_console"
LOG_LEVEL_NAME = "INFO"

# Display fallbacks
PRODUCT_LABEL_TEMPLATE = "Product {id}"
CUSTOMER_LABEL_TEMPLATE = "Customer {id}"
UNKNOWN_PRODUCT_LABEL = "Unknown Product"

# Return reasons, in the order the form offers them
RETURN_REASONS = (
    ("defective", "Defective product"),
    ("wrongOrder", "Wrong order"),
    ("damaged", "Damaged product"),
    ("expired", "Expired product"),
    ("unsatisfied", "Quality unsatisfactory"),
    ("other", "Other"),
)
DEFAULT_RETURN_REASON = "No reason provided"
