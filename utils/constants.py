NOT_AVAILABLE = "N/A"

DEFAULT_CURRENCY_CODE = "USD"

MICROS_PER_UNIT = 1_000_000

NANOS_DIGITS = 9

ANDROID_PUBLISHER_SCOPES = ['https://www.googleapis.com/auth/androidpublisher']

ANDROID_PUBLISHER_API_VERSION = 'v3'

REQUIRED_PURCHASE_FIELDS = ["packageName", "productId", "token", "profileId"]

PRODUCT_TYPES = {
    "subscription": "subscription",
    # in-app products are listed raw on /products, not normalized yet
    "one_time": "one_time"
}
