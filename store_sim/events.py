from __future__ import annotations

# Input parsing for the event driver.
#
# Two plain-text files feed a run:
#
# Configuration:
#     <numCounters> <numProducts>
#     <code> <price> <processingDuration>      (numProducts times)
#
# Events (one per line, replayed in file order, never re-sorted):
#     <time> CLIENT <clientCode> <productCode> [<productCode> ...]
#     <time> COUNTER
#
# Any malformed line is fatal (`ParseError`). Unknown product codes are *not*
# a parse error; the store skips them when building the cart.

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from .errors import InputFileError, ParseError
from .models import Product

CLIENT = "CLIENT"
COUNTER = "COUNTER"


@dataclass(frozen=True)
class StoreConfig:
    num_counters: int
    products: tuple[Product, ...]

    def catalog(self) -> dict[str, Product]:
        return {p.code: p for p in self.products}


@dataclass(frozen=True)
class ClientArrival:
    time: int
    client_code: int
    product_codes: tuple[str, ...]


@dataclass(frozen=True)
class CounterOpening:
    time: int


Event = ClientArrival | CounterOpening


def read_lines(path: str | Path) -> list[str]:
    """Read a whole input file, mapping OS failures to `InputFileError`."""
    try:
        return Path(path).read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise InputFileError(str(path), e.strerror or str(e)) from e


# -------------------- configuration --------------------


def parse_config(lines: Iterable[str], *, source: str = "<config>") -> StoreConfig:
    it = iter(enumerate(lines, start=1))

    line_no, header = _next_line(it, source, "missing header line")
    tokens = header.split()
    if len(tokens) != 2:
        raise ParseError("header must be '<numCounters> <numProducts>'", source=source, line_no=line_no, line=header)
    num_counters = _parse_int(tokens[0], "numCounters", source, line_no, header)
    num_products = _parse_int(tokens[1], "numProducts", source, line_no, header)

    products: list[Product] = []
    seen: set[str] = set()
    for _ in range(num_products):
        line_no, line = _next_line(it, source, f"expected {num_products} product lines, got {len(products)}")
        tokens = line.split()
        if len(tokens) != 3:
            raise ParseError(
                "product line must be '<code> <price> <processingDuration>'",
                source=source,
                line_no=line_no,
                line=line,
            )
        code = tokens[0]
        if code in seen:
            raise ParseError(f"duplicate product code {code!r}", source=source, line_no=line_no, line=line)
        seen.add(code)
        price = _parse_price(tokens[1], source, line_no, line)
        duration = _parse_int(tokens[2], "processingDuration", source, line_no, line)
        products.append(Product(code=code, price=price, processing_duration=duration))

    return StoreConfig(num_counters=num_counters, products=tuple(products))


def load_config(path: str | Path) -> StoreConfig:
    return parse_config(read_lines(path), source=str(path))


# -------------------- events --------------------


def parse_event_line(line: str, *, source: str = "<events>", line_no: int | None = None) -> Event:
    tokens = line.split()
    if len(tokens) < 2:
        raise ParseError("event must be '<time> CLIENT ...' or '<time> COUNTER'", source=source, line_no=line_no, line=line)

    time = _parse_int(tokens[0], "time", source, line_no, line)
    kind = tokens[1]

    if kind == CLIENT:
        if len(tokens) < 4:
            raise ParseError(
                "client event must be '<time> CLIENT <clientCode> <productCode>...'",
                source=source,
                line_no=line_no,
                line=line,
            )
        client_code = _parse_int(tokens[2], "clientCode", source, line_no, line)
        return ClientArrival(time=time, client_code=client_code, product_codes=tuple(tokens[3:]))

    if kind == COUNTER:
        if len(tokens) != 2:
            raise ParseError("counter event takes no arguments", source=source, line_no=line_no, line=line)
        return CounterOpening(time=time)

    raise ParseError(f"unknown event type {kind!r}", source=source, line_no=line_no, line=line)


def parse_events(lines: Iterable[str], *, source: str = "<events>") -> Iterator[Event]:
    """Yield events in input order. Blank lines are skipped."""
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        yield parse_event_line(line, source=source, line_no=line_no)


def load_events(path: str | Path) -> tuple[Event, ...]:
    # Read and parse everything up front so a bad file fails before the simulation starts.
    return tuple(parse_events(read_lines(path), source=str(path)))


# -------------------- helpers --------------------


def _next_line(it: Iterator[tuple[int, str]], source: str, message: str) -> tuple[int, str]:
    try:
        return next(it)
    except StopIteration:
        raise ParseError(message, source=source) from None


def _parse_int(token: str, name: str, source: str, line_no: int | None, line: str) -> int:
    try:
        value = int(token)
    except ValueError:
        raise ParseError(f"{name} must be an integer, got {token!r}", source=source, line_no=line_no, line=line) from None
    if value < 0:
        raise ParseError(f"{name} must be >= 0, got {value}", source=source, line_no=line_no, line=line)
    return value


def _parse_price(token: str, source: str, line_no: int | None, line: str) -> Decimal:
    try:
        price = Decimal(token)
    except InvalidOperation:
        raise ParseError(f"price must be a decimal number, got {token!r}", source=source, line_no=line_no, line=line) from None
    if not price.is_finite() or price < 0:
        raise ParseError(f"price must be a finite number >= 0, got {token!r}", source=source, line_no=line_no, line=line)
    return price
