from datetime import date
from threading import Event

import tcmb_rates
from tcmb_rates import ClientSettings, TcmbRates
from tcmb_rates.utils.logger import enable_console_logging

print(tcmb_rates.__version__)  # 0.1.0

# Show which feed documents are tried while resolving
enable_console_logging()

# Latest daily bulletin (falls back to the last published business day)
rates = tcmb_rates.get_rates()
print(rates[:2])

# Only currencies with forex quotes, for a specific date
forex = tcmb_rates.get_rates(date(2025, 11, 14), rate_type="forex")
print([rate.code for rate in forex])

# Turkish date strings are accepted too
usd = tcmb_rates.get_rate("USD", "14.11.2025")
print(usd.forex_buying, usd.forex_selling)

# Conversions go through TRY using forex buying/selling quotes
print(tcmb_rates.convert(100, "TRY", "USD"))
print(tcmb_rates.convert(100, "USD", "EUR"))
print(tcmb_rates.convert(100, "EUR", "TRY", use="banknote_buying"))

# Hourly (reeskont) snapshots, including gold and silver
print(tcmb_rates.get_hourly_rates(hour="14:00"))
gold = tcmb_rates.get_gold()
print(f"Gold: {gold.buying} TRY/gram ({gold.rate_date} {gold.hour})")
metals = tcmb_rates.get_precious_metals(date(2026, 1, 5))
print(metals.gold, metals.silver)

# Strict lookup: no day or hour fallback
try:
    tcmb_rates.get_hourly_rates(
        date(2026, 1, 3),
        "11:00",
        fallback_to_last_business_day=False,
        fallback_to_previous_hour=False,
    )
except tcmb_rates.NoDataWithinSearchBound as exc:
    print(f"Nothing published: {exc.last_error}")

# Dedicated client with its own cache and settings
client = TcmbRates(settings=ClientSettings(timeout=5.0, max_day_retries=7))
cancel = Event()
print(client.list_currencies(cancel_event=cancel))
print(client.get_raw_xml()[:200])
client.clear_cache()
