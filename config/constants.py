"""System constants and default values."""

from decimal import Decimal

# Annualisation conventions
TRADING_DAYS_PER_YEAR = 252
DAYS_PER_YEAR = Decimal('365.25')

# Rounding scales (quantize exponents)
AMOUNT_PLACES = Decimal('0.01')          # monetary amounts
PRICE_PLACES = Decimal('0.000001')       # prices and rates
PCT_PLACES = Decimal('0.000001')         # percentages stored as fractions
FX_RATE_PLACES = Decimal('0.00000001')   # FX rates

# Decimal context defaults
DEFAULT_DECIMAL_PRECISION = 28
DEFAULT_ROUNDING = "ROUND_HALF_UP"

# Money-weighted return solver
MWR_INITIAL_GUESS = Decimal('0.10')
MWR_DEFAULT_MAX_ITERATIONS = 100
MWR_DEFAULT_TOLERANCE = Decimal('1e-10')
MWR_DERIVATIVE_FLOOR = Decimal('1e-15')

# Risk metrics
DEFAULT_VOLATILITY_WINDOW = 30

# Currency configuration
BASE_CURRENCY = "EUR"
SUPPORTED_CURRENCIES = ["EUR", "USD", "CHF", "AUD", "GBP", "JPY", "SEK", "DKK", "NOK"]

# Logging configuration
LOG_FILE = "portfolio_analytics.log"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Version information
VERSION = "1.0.0"

# Error messages
ERROR_INVALID_DECIMAL = "Invalid decimal value"
ERROR_INSUFFICIENT_CASH = "Insufficient {currency} balance: have {have}, need {need}"
