# tamboon

Reads a ROT-128 encoded CSV file of donations, turns each card into an Omise
token, charges it, and prints a summary of what was received, what went
through and who gave the most.

## Installation

```
pip install .
```

## Usage

```
tamboon donations.csv.rot128
```

Run without an argument, the command prints `Usage: tamboon <inputfile.rot128>`
and exits with status 0. If the input file cannot be opened, the error is
logged and the exit status is 1.

The input file is a CSV encoded with ROT-128: 128 is added to every byte,
modulo 256, so encoding and decoding are the same operation. Its first line is
a header and the columns are:

```
Name,AmountSubunits,CCNumber,CVV,ExpMonth,ExpYear
```

Cells are stripped of surrounding whitespace. Empty lines and rows with fewer
than six columns are skipped. Amounts are in satang, so `5000` is THB 50.00.
Each card's expiry year is moved forward by `EXP_YEAR_INCREASE` years; a year
that is not a number counts as 0.

Records are read lazily and handed to a pool of worker threads. A donation
that fails is logged as `Error processing donation for <name>: ...` and counted
as faulty. When the run finishes, the summary is printed to standard output:

```
performing donations...
done.

        total received: THB  10,000.00
  successfully donated: THB   8,000.00
       faulty donation: THB   2,000.00

    average per person: THB   2,500.00
            top donors: Alice
                        Bob
                        Carol
```

The average is the total received divided by the number of records read. Up
to three donors with the largest successful totals are listed.

## Configuration

Settings come from environment variables. A `.env` file in the working
directory is loaded if there is one; otherwise a warning is logged.

| Variable                  | Meaning                                            | Default                          |
|---------------------------|----------------------------------------------------|----------------------------------|
| `OMISE_PKEY`              | public key, sent as basic-auth user for tokens     | (empty)                          |
| `OMISE_SKEY`              | secret key, sent as basic-auth user for charges    | (empty)                          |
| `OMISE_TOKEN_URL`         | token endpoint                                     | `https://vault.omise.co/tokens`  |
| `OMISE_CHARGE_URL`        | charge endpoint                                    | `https://api.omise.co/charges`   |
| `MAX_RECORDS`             | most records to read, where 0 or less means all    | `5`                              |
| `EXP_YEAR_INCREASE`       | years added to each card's expiry year             | `5`                              |
| `MAX_RETRIES`             | retries after a rate-limit error                   | `5`                              |
| `MAX_DONATION_GOROUTINES` | donations processed at the same time               | `4`                              |

Integer settings that are not plain decimal integers fall back to their
defaults. For example, a `.env` file:

```
OMISE_PKEY=placeholder
OMISE_SKEY=placeholder
MAX_RECORDS=0
```

Charges are made in THB. An API reply other than 200 becomes an
`OmiseError` carrying the API's error message, or `unknown error`. When that
message contains `rate limit`, all workers pause. The pause lasts 5 seconds
after the first hit, 10 after the second, and so on; once `MAX_RETRIES` is used
up the donation fails with `rate limit: exceeded max retries`.

## Library use

```python
import io

from tamboon.cipher import Rot128Reader, Rot128Writer, rot128
from tamboon.processor import stream_and_decrypt_file
from tamboon.omise_client import OmiseClient

assert rot128(b"\x80\x81\x82") == b"\x00\x01\x02"

with open("donations.csv.rot128", "wb") as raw:
    Rot128Writer(raw).write(b"Name,AmountSubunits,CCNumber,CVV,ExpMonth,ExpYear\n")

for record in stream_and_decrypt_file("donations.csv.rot128", 0, 0):
    print(record.name, record.amount_subunits)

client = OmiseClient.from_env()
stats = client.process_donations_stream(
    stream_and_decrypt_file("donations.csv.rot128", 5, 5), None
)
print(stats.success_amount, stats.top_donors(3))
```

Other pieces that can be used on their own:

- `tamboon.processor.parse_row(line, exp_year_increase)` parses one CSV line
  into a `DonationRecord`, or returns `None` for a short line.
- `tamboon.services.TokenService` and `tamboon.services.ChargeService` make
  single token and charge requests, with or without rate-limit retries.
- `tamboon.ratelimit.RateLimiter` and `call_with_rate_limit(call, limiter, max_retries)`
  provide the shared pause and the retry loop.
- `tamboon.summary.format_thb(subunits)` formats satang as baht, for example
  `format_thb(200000)` gives `2,000.00`; `format_summary(stats)` and
  `print_summary(stats, file)` render the report.
- `tamboon.settings.ClientConfig.from_env()` and `ProcessorConfig.from_env()`
  read the integer settings above.

## Tests

```
pip install ".[test]"
pytest
```