import os
from dotenv import load_dotenv

load_dotenv()

# Backend API configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "15"))

# Public site
BRAND_NAME = os.getenv("BRAND_NAME", "Slow Morocco")
CONTACT_EMAIL = os.getenv("CONTACT_EMAIL", "hello@slowmorocco.com")

# Streamlit configuration
PAGE_TITLE = BRAND_NAME
PAGE_ICON = "🐪"
LAYOUT = "wide"

# PayPal (Orders v2 REST API)
PAYPAL_CLIENT_ID = os.getenv("PAYPAL_CLIENT_ID", "")
PAYPAL_CLIENT_SECRET = os.getenv("PAYPAL_CLIENT_SECRET", "")
PAYPAL_API_BASE = os.getenv("PAYPAL_API_BASE", "https://api-m.sandbox.paypal.com")
PAYPAL_CURRENCY = "EUR"
PAYPAL_RETURN_URL = os.getenv("PAYPAL_RETURN_URL", "http://localhost:8501/Day_Trips")

# Theme
PRIMARY_COLOR = "#8b5a2b"
