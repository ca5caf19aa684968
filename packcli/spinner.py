"""A terminal spinner that animates a character set on a background thread."""

from __future__ import annotations

import os
import sys
import threading
from typing import Callable, Iterable, Optional, TextIO

_CLOCK_ONE_OCLOCK = 0x1F550
_CLOCK_ONE_THIRTY = 0x1F55C

CHAR_SETS: dict[int, list[str]] = {
    0: ["←", "↖", "↑", "↗", "→", "↘", "↓", "↙"],
    1: ["▁", "▃", "▄", "▅", "▆", "▇", "█", "▇", "▆", "▅", "▄", "▃", "▁"],
    2: ["▖", "▘", "▝", "▗"],
    3: ["┤", "┘", "┴", "└", "├", "┌", "┬", "┐"],
    4: ["◢", "◣", "◤", "◥"],
    5: ["◰", "◳", "◲", "◱"],
    6: ["◴", "◷", "◶", "◵"],
    7: ["◐", "◓", "◑", "◒"],
    8: [".", "o", "O", "@", "*"],
    9: ["|", "/", "-", "\\"],
    10: ["◡◡", "⊙⊙", "◠◠"],
    11: ["⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷"],
    12: [">))'>", " >))'>", "  >))'>", "   >))'>", "    >))'>", "   <'((<", "  <'((<", " <'((<"],
    13: ["⠁", "⠂", "⠄", "⡀", "⢀", "⠠", "⠐", "⠈"],
    14: ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"],
    15: list("abcdefghijklmnopqrstuvwxyz"),
    16: ["▉", "▊", "▋", "▌", "▍", "▎", "▏", "▎", "▍", "▌", "▋", "▊", "▉"],
    17: ["■", "□", "▪", "▫"],
    18: ["←", "↑", "→", "↓"],
    19: ["╫", "╪"],
    20: ["⇐", "⇖", "⇑", "⇗", "⇒", "⇘", "⇓", "⇙"],
    21: ["⠁", "⠁", "⠉", "⠙", "⠚", "⠒", "⠂", "⠂", "⠒", "⠲", "⠴", "⠤", "⠄", "⠄", "⠤", "⠠",
         "⠠", "⠤", "⠦", "⠖", "⠒", "⠐", "⠐", "⠒", "⠓", "⠋", "⠉", "⠈", "⠈"],
    22: ["⠈", "⠉", "⠋", "⠓", "⠒", "⠐", "⠐", "⠒", "⠖", "⠦", "⠤", "⠠", "⠠", "⠤", "⠦", "⠖",
         "⠒", "⠐", "⠐", "⠒", "⠓", "⠋", "⠉", "⠈"],
    23: ["⠁", "⠉", "⠙", "⠚", "⠒", "⠂", "⠂", "⠒", "⠲", "⠴", "⠤", "⠄", "⠄", "⠤", "⠴", "⠲",
         "⠒", "⠂", "⠂", "⠒", "⠚", "⠙", "⠉", "⠁"],
    24: ["⠋", "⠙", "⠚", "⠒", "⠂", "⠂", "⠒", "⠲", "⠴", "⠦", "⠖", "⠒", "⠐", "⠐", "⠒", "⠓", "⠋"],
    25: list("ｦｧｨｩｪｫｬｭｮｯｱｲｳｴｵｶｷｸｹｺｻｼｽｾｿﾀﾁﾂﾃﾄﾅﾆﾇﾈﾉﾊﾋﾌﾍﾎﾏﾐﾑﾒﾓﾔﾕﾖﾗﾘﾙﾚﾛﾜﾝ"),
    26: [".", "..", "..."],
    27: ["▁", "▂", "▃", "▄", "▅", "▆", "▇", "█", "▉", "▊", "▋", "▌", "▍", "▎", "▏", "▏",
         "▎", "▍", "▌", "▋", "▊", "▉", "█", "▇", "▆", "▅", "▄", "▃", "▂", "▁"],
    28: [".", "o", "O", "°", "O", "o", "."],
    29: ["+", "x"],
    30: ["v", "<", "^", ">"],
    31: [">>--->", " >>--->", "  >>--->", "   >>--->", "    >>--->", "    <---<<", "   <---<<",
         "  <---<<", " <---<<", "<---<<"],
    32: ["|", "||", "|||", "||||", "|||||", "|||||||", "||||||||", "|||||||", "||||||", "|||||",
         "||||", "|||", "||", "|"],
    33: ["[          ]", "[=         ]", "[==        ]", "[===       ]", "[====      ]",
         "[=====     ]", "[======    ]", "[=======   ]", "[========  ]", "[========= ]",
         "[==========]"],
    34: ["(*---------)", "(-*--------)", "(--*-------)", "(---*------)", "(----*-----)",
         "(-----*----)", "(------*---)", "(-------*--)", "(--------*-)", "(---------*)"],
    35: ["█▒▒▒▒▒▒▒▒▒", "███▒▒▒▒▒▒▒", "█████▒▒▒▒▒", "███████▒▒▒", "██████████"],
    36: ["[                    ]", "[=>                  ]", "[===>                ]",
         "[=====>              ]", "[======>             ]", "[========>           ]",
         "[==========>         ]", "[============>       ]", "[==============>     ]",
         "[================>   ]", "[==================> ]", "[===================>]"],
    39: ["🌍", "🌎", "🌏"],
    40: ["◜", "◝", "◞", "◟"],
    41: ["⬒", "⬔", "⬓", "⬕"],
    42: ["⬖", "⬘", "⬗", "⬙"],
    43: ["[>>>          >]", "[]>>>>        []", "[]  >>>>      []", "[]    >>>>    []",
         "[]      >>>>  []", "[]        >>>>[]", "[>>          >>]"],
    44: ["♠", "♣", "♥", "♦"],
    45: ["➞", "➟", "➠", "➡", "➠", "➟"],
    46: ["  |  ", " \\   ", "_    ", " \\   ", "  |  ", "   / ", "    _", "   / "],
    47: ["  . . . .", ".   . . .", ". .   . .", ". . .   .", ". . . .  ", ". . . . ."],
    48: [" |     ", "  /    ", "   _   ", "    \\  ", "     | ", "    \\  ", "   _   ", "  /    "],
    49: ["⎺", "⎻", "⎼", "⎽", "⎼", "⎻"],
    50: ["▹▹▹▹▹", "▸▹▹▹▹", "▹▸▹▹▹", "▹▹▸▹▹", "▹▹▹▸▹", "▹▹▹▹▸"],
    51: ["[    ]", "[   =]", "[  ==]", "[ ===]", "[====]", "[=== ]", "[==  ]", "[=   ]"],
    52: ["( ●    )", "(  ●   )", "(   ●  )", "(    ● )", "(     ●)", "(    ● )", "(   ●  )",
         "(  ●   )", "( ●    )"],
    53: ["✶", "✸", "✹", "✺", "✹", "✷"],
    54: ["▐|\\____________▌", "▐_|\\___________▌", "▐__|\\__________▌", "▐___|\\_________▌",
         "▐____|\\________▌", "▐_____|\\_______▌", "▐______|\\______▌", "▐_______|\\_____▌",
         "▐________|\\____▌", "▐_________|\\___▌", "▐__________|\\__▌", "▐___________|\\_▌",
         "▐____________|\\▌", "▐____________/|▌", "▐___________/|_▌", "▐__________/|__▌",
         "▐_________/|___▌", "▐________/|____▌", "▐_______/|_____▌", "▐______/|______▌",
         "▐_____/|_______▌", "▐____/|________▌", "▐___/|_________▌", "▐__/|__________▌",
         "▐_/|___________▌", "▐/|____________▌"],
    55: ["▐⠂       ▌", "▐⠈       ▌", "▐ ⠂      ▌", "▐ ⠠      ▌", "▐  ⡀     ▌", "▐  ⠠     ▌",
         "▐   ⠂    ▌", "▐   ⠈    ▌", "▐    ⠂   ▌", "▐    ⠠   ▌", "▐     ⡀  ▌", "▐     ⠠  ▌",
         "▐      ⠂ ▌", "▐      ⠈ ▌", "▐       ⠂▌", "▐       ⠠▌", "▐       ⡀▌", "▐      ⠠ ▌",
         "▐      ⠂ ▌", "▐     ⠈  ▌", "▐     ⠂  ▌", "▐    ⠠   ▌", "▐    ⡀   ▌", "▐   ⠠    ▌",
         "▐   ⠂    ▌", "▐  ⠈     ▌", "▐  ⠂     ▌", "▐ ⠠      ▌", "▐ ⡀      ▌", "▐⠠       ▌"],
    56: ["¿", "?"],
    57: ["⢹", "⢺", "⢼", "⣸", "⣇", "⡧", "⡗", "⡏"],
    58: ["⢄", "⢂", "⢁", "⡁", "⡈", "⡐", "⡠"],
    59: [".  ", ".. ", "...", " ..", "  .", "   "],
    60: [".", "o", "O", "°", "O", "o", "."],
    61: ["▓", "▒", "░"],
    62: ["▌", "▀", "▐", "▄"],
    63: ["⊶", "⊷"],
    64: ["▪", "▫"],
    65: ["□", "■"],
    66: ["▮", "▯"],
    67: ["-", "=", "≡"],
    68: ["d", "q", "p", "b"],
    69: ["∙∙∙", "●∙∙", "∙●∙", "∙∙●", "∙∙∙"],
    70: ["🌑 ", "🌒 ", "🌓 ", "🌔 ", "🌕 ", "🌖 ", "🌗 ", "🌘 "],
    71: ["☗", "☖"],
    72: ["⧇", "⧆"],
    73: ["◉", "◎"],
    74: ["㊂", "㊀", "㊁"],
    75: ["⦾", "⦿"],
    76: ["ဝ", "၀"],
    77: ["▌", "▀", "▐▄"],
}

CHAR_SETS[37] = [chr(_CLOCK_ONE_OCLOCK + i) for i in range(12)]
CHAR_SETS[38] = [
    clock
    for i in range(12)
    for clock in (chr(_CLOCK_ONE_OCLOCK + i), chr(_CLOCK_ONE_THIRTY + i))
]

_FG = {"black": 30, "red": 31, "green": 32, "yellow": 33,
       "blue": 34, "magenta": 35, "cyan": 36, "white": 37}

_COLOR_ATTRIBUTES: dict[str, int] = {
    # plain names map to foreground colours
    **_FG,
    "reset": 0,
    "bold": 1,
    "faint": 2,
    "italic": 3,
    "underline": 4,
    "blinkslow": 5,
    "blinkrapid": 6,
    "reversevideo": 7,
    "concealed": 8,
    "crossedout": 9,
    **{f"fg{n.capitalize()}": code for n, code in _FG.items()},
    **{f"fgHi{n.capitalize()}": code + 60 for n, code in _FG.items()},
    **{f"bg{n.capitalize()}": code + 10 for n, code in _FG.items()},
    **{f"bgHi{n.capitalize()}": code + 70 for n, code in _FG.items()},
}

_IS_WINDOWS = os.name == "nt"


class InvalidColorError(ValueError):
    """Raised when a colour name is not one the spinner supports."""

    def __init__(self, message: str = "invalid color") -> None:
        super().__init__(message)


def valid_color(name: str) -> bool:
    """Report whether ``name`` is a supported colour or attribute."""
    return name in _COLOR_ATTRIBUTES


def generate_number_sequence(length: int) -> list[str]:
    """Return the numbers ``0`` to ``length - 1`` as strings."""
    if length < 0:
        raise ValueError("length must not be negative")
    return [str(i) for i in range(length)]


def _colors_disabled() -> bool:
    if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        return True
    isatty = getattr(sys.stdout, "isatty", None)
    return not (isatty is not None and isatty())


def _color_function(codes: list[int], colorize: Optional[bool]) -> Callable[[str], str]:
    enabled = not _colors_disabled() if colorize is None else colorize
    if not enabled:
        return lambda text: text
    start = "\x1b[" + ";".join(str(c) for c in codes) + "m"
    return lambda text: f"{start}{text}\x1b[0m"


class Spinner:
    """Animates a character set on a writer until stopped."""

    def __init__(
        self,
        chars: list[str],
        delay: float,
        *,
        parent: Optional[threading.Event] = None,
        color: Optional[str] = None,
        prefix: str = "",
        suffix: str = "",
        final_msg: str = "",
        hide_cursor: bool = False,
        writer: Optional[TextIO] = None,
        colorize: Optional[bool] = None,
        pre_update: Optional[Callable[["Spinner"], None]] = None,
        post_update: Optional[Callable[["Spinner"], None]] = None,
    ) -> None:
        self._mu = threading.Lock()
        self.parent = parent if parent is not None else threading.Event()
        self.chars = chars
        self.delay = delay
        self.prefix = prefix
        self.suffix = suffix
        self.final_msg = final_msg
        self.hide_cursor = hide_cursor
        self.writer: TextIO = writer if writer is not None else sys.stdout
        self.colorize = colorize
        self.pre_update = pre_update
        self.post_update = post_update
        self.last_output = ""
        self._color_fn = _color_function([_COLOR_ATTRIBUTES["fgWhite"]], colorize)
        self._active = False
        self._cancel = threading.Event()
        self._thread: Optional[threading.Thread] = None
        if color is not None:
            self.color(color)

    @property
    def active(self) -> bool:
        """Whether the spinner is currently running."""
        return self._active

    def _emit(self, text: str) -> None:
        self.writer.write(text)
        flush = getattr(self.writer, "flush", None)
        if flush is not None:
            flush()

    def start(self) -> None:
        """Start the animation; does nothing if already running."""
        with self._mu:
            if self._active:
                return
            if self.delay <= 0:
                raise ValueError("non-positive interval for spinner delay")
            if self.hide_cursor and not _IS_WINDOWS:
                sys.stdout.write("\033[?25l")
                sys.stdout.flush()
            self._active = True
            self._cancel = threading.Event()
            self._thread = threading.Thread(
                target=self._run, args=(self._cancel, self.delay), daemon=True
            )
            self._thread.start()

    def _run(self, cancel: threading.Event, delay: float) -> None:
        index = 0
        while True:
            if cancel.wait(delay) or self.parent.is_set():
                return
            with self._mu:
                if not self._active or cancel.is_set():
                    return
                chars = self.chars
                if not chars:
                    continue
                if index >= len(chars):
                    index = 0
                self._erase()
                if self.pre_update is not None:
                    self.pre_update(self)
                frame = chars[index]
                plain = f"\r{self.prefix}{frame}{self.suffix} "
                if _IS_WINDOWS and self.writer is sys.stderr:
                    out = plain
                else:
                    out = f"\r{self.prefix}{self._color_fn(frame)}{self.suffix} "
                self._emit(out)
                self.last_output = plain
                if self.post_update is not None:
                    self.post_update(self)
                index = (index + 1) % len(chars)

    def stop(self) -> None:
        """Stop the animation, clear it and write the final message."""
        with self._mu:
            if not self._active:
                return
            self._active = False
            self._cancel.set()
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        with self._mu:
            if self.hide_cursor and not _IS_WINDOWS:
                sys.stdout.write("\033[?25h")
                sys.stdout.flush()
            self._erase()
            if self.final_msg:
                self._emit(self.final_msg)

    def restart(self) -> None:
        """Stop and start the animation."""
        self.stop()
        self.start()

    def reverse(self) -> None:
        """Reverse the character set in place."""
        with self._mu:
            self.chars.reverse()

    def color(self, *args: str) -> None:
        """Set the colours and attributes used for frames, then restart."""
        codes = []
        for name in args:
            if not valid_color(name):
                raise InvalidColorError()
            codes.append(_COLOR_ATTRIBUTES[name])
        with self._mu:
            self._color_fn = _color_function(codes, self.colorize)
        self.restart()

    def update_speed(self, delay: float) -> None:
        """Set the delay between frames, in seconds."""
        with self._mu:
            self.delay = delay

    def update_char_set(self, chars: list[str]) -> None:
        """Replace the character set."""
        with self._mu:
            self.chars = chars

    def _erase(self) -> None:
        n = len(self.last_output)
        if _IS_WINDOWS:
            self._emit("\r" + " " * n + "\r")
            self.last_output = ""
            return
        for c in ("\b", "\127", "\b", "\033[K"):
            self._emit(c * n)
        self._emit("\r\033[K")
        self.last_output = ""

    def lock(self) -> None:
        """Take the spinner's lock for manual control."""
        self._mu.acquire()

    def unlock(self) -> None:
        """Release the spinner's lock."""
        self._mu.release()

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()