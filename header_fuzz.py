#!/usr/bin/env python3
# header-fuzz - fuzz a single HTTP header from a wordlist and report unexpected status codes

import argparse
import os
import re
import sys
import time
import gzip
import warnings
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Set, Tuple

import requests
from urllib3.exceptions import InsecureRequestWarning
from colorama import init as colorama_init, Fore, Style
from tqdm import tqdm

__version__ = "0.4"

# ---------- Globals ----------
USE_COLOR = False

FUZZ_MARKER = "%FUZZ%"
DEFAULT_HEADER = "Host"
DEFAULT_IGNORE = "403"

# progress estimates are only recomputed every N completed lines
_RECALC_EVERY = 10
_PLACEHOLDER_TIME = "--:--:--"

# Status shown when the request produced no code (refused, DNS, TLS, ...).
NO_CODE = 0

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/125.0.0.0 Safari/537.36"
)

_CODE_RE = re.compile(r"\d{3}")
_PROXY_RE = re.compile(r"^https?://[^\s/:]+(:[0-9]{1,5})?/?$")


# ═══════════════════════════════════════════════════════════════
#  Errors
# ═══════════════════════════════════════════════════════════════

class HeaderFuzzError(Exception):
    """Fatal configuration problem. ``main`` prints it and exits."""
    exit_code = 1


class ValidationError(HeaderFuzzError):
    pass


class MissingRequiredError(HeaderFuzzError):
    pass


# ═══════════════════════════════════════════════════════════════
#  Configuration
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Config:
    """Validated run parameters."""
    header: str
    ignore_codes: frozenset
    fuzz: str
    proxy: Optional[str]
    wordlist: str
    url: str
    timeout: Optional[float] = None


# ═══════════════════════════════════════════════════════════════
#  Validation
# ═══════════════════════════════════════════════════════════════

def validate_code(codes: str) -> Tuple[bool, str]:
    for token in codes.split(","):
        token = token.strip()
        if not _CODE_RE.fullmatch(token):
            return False, f"Invalid status code '{token}' in '{codes}' (expected three digits, e.g. 403,404)"
    return True, ""


def validate_fuzz(template: str) -> Tuple[bool, str]:
    count = template.count(FUZZ_MARKER)
    if count == 0:
        return False, f"Fuzz template '{template}' does not contain {FUZZ_MARKER}"
    if count > 1:
        return False, f"Fuzz template '{template}' contains {FUZZ_MARKER} {count} times (only one allowed)"
    return True, ""


def validate_proxy(proxy: str) -> Tuple[bool, str]:
    if not _PROXY_RE.match(proxy):
        return False, f"Invalid proxy '{proxy}' (expected http(s)://host[:port])"
    return True, ""


def validate_wordlist(path: str) -> Tuple[bool, str]:
    if not os.path.isfile(path):
        return False, f"Wordlist '{path}' does not exist or is not a file"
    return True, ""


def parse_ignore_codes(codes: str) -> frozenset:
    return frozenset(int(c.strip()) for c in codes.split(","))


def build_config(args: argparse.Namespace) -> Config:
    """Turn parsed flags into a ``Config``.

    Validators run in flag order and the first failure is raised as
    ``ValidationError``. Missing ``-w``/``-u`` raise ``MissingRequiredError``.
    """
    header = args.header if args.header is not None else DEFAULT_HEADER
    ignore = args.ignore if args.ignore is not None else DEFAULT_IGNORE
    fuzz = args.fuzz if args.fuzz is not None else FUZZ_MARKER

    checks = [validate_code(ignore), validate_fuzz(fuzz)]
    if args.proxy is not None:
        checks.append(validate_proxy(args.proxy))
    if args.wordlist is not None:
        checks.append(validate_wordlist(args.wordlist))
    for ok, msg in checks:
        if not ok:
            raise ValidationError(msg)

    if args.timeout is not None and args.timeout <= 0:
        raise ValidationError("--timeout must be > 0.")

    if not args.wordlist:
        raise MissingRequiredError("Wordlist (-w) is required.")
    if not args.url:
        raise MissingRequiredError("Target URL (-u) is required.")

    return Config(
        header=header,
        ignore_codes=parse_ignore_codes(ignore),
        fuzz=fuzz,
        proxy=args.proxy,
        wordlist=args.wordlist,
        url=args.url,
        timeout=args.timeout,
    )


# ═══════════════════════════════════════════════════════════════
#  Progress estimation
# ═══════════════════════════════════════════════════════════════

def get_seconds_elapsed(start: int, now: int) -> int:
    return now - start


def get_seconds_total(elapsed: int, completed: int, total: int) -> int:
    """Projected run time; integer division truncates."""
    return total * elapsed // completed


def get_seconds_remain(total: int, elapsed: int) -> int:
    return total - elapsed


def format_seconds(seconds: int) -> str:
    """``45 -> 00:00:45``, ``3661 -> 1:01:01``. Hours are not bounded."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    mins, secs = divmod(rest, 60)
    h = str(hours) if hours else "00"
    return f"{h}:{mins:02d}:{secs:02d}"


class ProgressState:
    """Completed/total counter with elapsed and remaining estimates."""

    def __init__(self, total: int, start: Optional[int] = None):
        self.start = int(time.time()) if start is None else start
        self.index = 0
        self.total = total
        self.elapsed_str = _PLACEHOLDER_TIME
        self.total_str = _PLACEHOLDER_TIME
        self.remain_str = _PLACEHOLDER_TIME

    def advance(self, now: Optional[int] = None):
        self.index += 1
        if self.index % _RECALC_EVERY != 0:
            return
        now = int(time.time()) if now is None else now
        elapsed = get_seconds_elapsed(self.start, now)
        total = get_seconds_total(elapsed, self.index, self.total)
        self.elapsed_str = format_seconds(elapsed)
        self.total_str = format_seconds(total)
        self.remain_str = format_seconds(get_seconds_remain(total, elapsed))

    def render(self) -> str:
        return (f"{self.index}/{self.total}  elapsed {self.elapsed_str}"
                f"  total {self.total_str}  remaining {self.remain_str}")


# ═══════════════════════════════════════════════════════════════
#  Formatting helpers
# ═══════════════════════════════════════════════════════════════

def fmt_code(status: int) -> str:
    return f"{status:03d}"


def color_status(status: int) -> str:
    text = f"[{fmt_code(status)}]"
    if not USE_COLOR:
        return text
    if status == NO_CODE:
        return Fore.RED + text + Style.RESET_ALL
    if 200 <= status < 300:
        return Fore.GREEN + text + Style.RESET_ALL
    elif 300 <= status < 400:
        return Fore.YELLOW + text + Style.RESET_ALL
    elif 400 <= status < 500:
        return Fore.RED + text + Style.RESET_ALL
    elif 500 <= status < 600:
        return Fore.MAGENTA + text + Style.RESET_ALL
    return text


def _fmt_counter(counter: Counter) -> str:
    """Status distribution, e.g. '403×98  200×2'."""
    if not counter:
        return "—"
    parts = []
    for code, count in sorted(counter.items(), key=lambda item: -item[1]):
        parts.append(f"{fmt_code(code)}×{count}")
    return "  ".join(parts)


def format_result(status: int, header: str, value: str, url: str) -> str:
    return f"{color_status(status)} {header}: {value} -> {url}"


# ═══════════════════════════════════════════════════════════════
#  Wordlist reading
# ═══════════════════════════════════════════════════════════════

def _open_text(path: str):
    return gzip.open(path, "rt", encoding="utf-8", errors="ignore") if path.lower().endswith(".gz") \
        else open(path, "r", encoding="utf-8", errors="ignore")


def read_wordlist(wordlist_path: str) -> Iterable[str]:
    """Yield every line with only its line terminator removed."""
    with _open_text(wordlist_path) as f:
        for line in f:
            yield line.rstrip("\r\n")


def count_lines(wordlist_path: str) -> int:
    c = 0
    with _open_text(wordlist_path) as f:
        for _ in f:
            c += 1
    return c


# ═══════════════════════════════════════════════════════════════
#  Core request function
# ═══════════════════════════════════════════════════════════════

def build_header_value(template: str, word: str) -> str:
    prefix, _, suffix = template.partition(FUZZ_MARKER)
    return prefix + word + suffix


def make_session(proxy: Optional[str]) -> requests.Session:
    session = requests.Session()
    session.trust_env = False
    session.verify = False
    if proxy:
        session.proxies.update({"http": proxy, "https": proxy})
    session.headers["User-Agent"] = _DEFAULT_USER_AGENT
    return session


def check_header(*,
                 session: requests.Session,
                 url: str,
                 header: str,
                 value: str,
                 timeout: Optional[float] = None) -> int:
    """
    HEAD request carrying ``header: value``.
    The value goes out UTF-8 encoded so any wordlist line can be sent.
    Returns the status code, or NO_CODE if the request failed.
    """
    try:
        response = session.head(
            url,
            headers={header: value.encode("utf-8")},
            allow_redirects=False,
            timeout=timeout,
        )
    except (requests.RequestException, UnicodeError):
        return NO_CODE
    try:
        return response.status_code
    finally:
        response.close()


# ═══════════════════════════════════════════════════════════════
#  Main fuzzing loop
# ═══════════════════════════════════════════════════════════════

class RunStats(NamedTuple):
    processed: int
    hits: int
    status_counter: Counter
    elapsed: float


class FuzzDriver:
    """Sequential header fuzzing over a wordlist."""

    def __init__(self, config: Config, session: requests.Session):
        self.config = config
        self.session = session
        self.progress: Optional[ProgressState] = None

    def print_banner(self, total: int):
        cfg = self.config
        ignored: Set[int] = set(cfg.ignore_codes)
        print(f"\n{'─' * 80}")
        print(f"  Target    : {cfg.url}")
        print(f"  Header    : {cfg.header}: {cfg.fuzz}")
        print(f"  Ignore    : {', '.join(fmt_code(c) for c in sorted(ignored))}")
        print(f"  Proxy     : {cfg.proxy or '—'}")
        print(f"  Wordlist  : {cfg.wordlist} ({total:,} lines)")
        print(f"  Timeout   : {f'{cfg.timeout}s' if cfg.timeout else 'none'}   TLS verify: OFF (insecure)")
        print(f"{'─' * 80}\n")

    def run(self) -> RunStats:
        cfg = self.config
        total = count_lines(cfg.wordlist)
        self.print_banner(total)

        self.progress = ProgressState(total)
        status_counter: Counter = Counter()
        hits = 0
        run_start = time.monotonic()
        pbar = tqdm(
            total=total,
            bar_format="{desc}",
            file=sys.stdout,
            mininterval=0,
            miniters=1,
            leave=True,
            disable=False,
        )
        try:
            for word in read_wordlist(cfg.wordlist):
                value = build_header_value(cfg.fuzz, word)
                status = check_header(
                    session=self.session,
                    url=cfg.url,
                    header=cfg.header,
                    value=value,
                    timeout=cfg.timeout,
                )
                status_counter[status] += 1

                if status not in cfg.ignore_codes:
                    hits += 1
                    tqdm.write(format_result(status, cfg.header, value, cfg.url), file=sys.stdout)

                self.progress.advance()
                pbar.set_description_str(self.progress.render(), refresh=False)
                pbar.update(1)
        finally:
            pbar.close()

        print()
        elapsed = time.monotonic() - run_start
        return RunStats(self.progress.index, hits, status_counter, elapsed)


def print_summary(stats: RunStats):
    mins, secs = divmod(stats.elapsed, 60)
    if mins:
        elapsed_str = f"{int(mins)}m {secs:.1f}s"
    else:
        elapsed_str = f"{secs:.1f}s"

    print(f"{'─' * 80}")
    print(f"  Done in {elapsed_str}  ({stats.processed:,} requests)")
    print(f"  Hits: {stats.hits}")
    if stats.status_counter:
        print(f"  Status distribution: {_fmt_counter(stats.status_counter)}")
    print(f"{'─' * 80}")


# ═══════════════════════════════════════════════════════════════
#  Entry point
# ═══════════════════════════════════════════════════════════════

class _ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit 1 instead of argparse's 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    marker = FUZZ_MARKER.replace("%", "%%")  # argparse %-formats help strings
    parser = _ArgumentParser(
        prog="header-fuzz",
        description=(
            f"Fuzz one HTTP header with a wordlist. Every line replaces {FUZZ_MARKER} in the "
            "fuzz template; responses whose status code is not ignored are printed."
        ),
    )
    parser.add_argument("-H", "--header", help=f"Header name to fuzz. Default: {DEFAULT_HEADER}")
    parser.add_argument("-i", "--ignore",
                        help=f"Comma-separated 3-digit status codes to ignore (000 = no response). "
                             f"Default: {DEFAULT_IGNORE}")
    parser.add_argument("-f", "--fuzz",
                        help=f"Header value template containing {marker} exactly once, "
                             f"e.g. 'pre-{marker}.example.com'. Default: {marker}")
    parser.add_argument("-p", "--proxy", help="HTTP(S) proxy, e.g. http://127.0.0.1:8080")
    parser.add_argument("-w", "--wordlist", help="Path to the wordlist file (optionally .gz). Lines are sent verbatim; "
                             "a line with leading whitespace is not a valid header value and reports 000")
    parser.add_argument("-u", "--url", help="Target URL")
    parser.add_argument("-t", "--timeout", type=float, default=None,
                        help="Request timeout in seconds. Default: none")
    parser.add_argument("--no-color", action="store_true", help="Disable colored status codes")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    global USE_COLOR
    USE_COLOR = (not args.no_color) and sys.stdout.isatty()
    if USE_COLOR:
        colorama_init()

    try:
        config = build_config(args)
    except HeaderFuzzError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code

    warnings.filterwarnings("ignore", category=InsecureRequestWarning)

    with make_session(config.proxy) as session:
        stats = FuzzDriver(config, session).run()

    print_summary(stats)
    return 0


def cli():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nFuzzing interrupted by user.")
        sys.exit(130)


if __name__ == "__main__":
    cli()
