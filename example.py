from egp_rates import HTMLTableBank, UnrecognizedCurrency, build_rate_table, try_build_rate_table

print(build_rate_table([]).as_dict())  # {'sell': {}, 'buy': {}}

# Rows as scraped from a bank page: label, buy, sell, then anything else
rows = [
    ["US Dollar", "47.55", "47.65", "07:30"],
    ["Euro", "51.20", "51.60"],
    ["Pound Sterling", "60.10", "60.55"],
    ["Saudi Riyal", "12.63", "12.70"],
]
table = build_rate_table(rows)
print(table.as_dict())
# => {'sell': {'USD': 47.65, 'EUR': 51.6, 'GBP': 60.55, 'SAR': 12.7}, 'buy': {...}}
print(table.to_frame())

# Unknown labels fail the whole table
try:
    build_rate_table(rows + [["Ruritanian Franc", "1.0", "1.1"]])
except UnrecognizedCurrency as exc:
    print(exc)  # Unknown currency Ruritanian Franc

result = try_build_rate_table([["Bad Currency", "1", "1"]])
print(result.ok, result.error)


# Scraping a live page
class ExampleBank(HTMLTableBank):
    sym = "EXAMPLE"
    uri = "https://bank.example.com/exchange-rates"
    table_selector = "table.rates"
    columns = (0, 2, 3)


# print(ExampleBank().exchange_rates().as_dict())
