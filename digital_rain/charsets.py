"""Color themes and character sets selectable from the command line."""

from enum import Enum
from types import MappingProxyType

from .colors import RgbColor


class ColorTheme(Enum):
    """Base colors for the rain."""
    GREEN = "green"
    AMBER = "amber"
    RED = "red"
    ORANGE = "orange"
    BLUE = "blue"
    PURPLE = "purple"
    CYAN = "cyan"
    PINK = "pink"
    WHITE = "white"

    @property
    def rgb(self) -> RgbColor:
        """RGB value of the theme."""
        return THEME_COLORS[self]


class CharSet(Enum):
    """Glyph sets a stream can draw from."""
    MATRIX = "matrix"
    BINARY = "binary"
    SYMBOLS = "symbols"
    EMOJIS = "emojis"
    KANJI = "kanji"
    GREEK = "greek"
    CYRILLIC = "cyrillic"
    MATH = "math"
    BRAILLE = "braille"
    DNA = "dna"
    PERSIAN = "persian"

    @property
    def chars(self) -> tuple[str, ...]:
        """The glyphs of this set, in table order."""
        return CHAR_SETS[self]


THEME_COLORS = MappingProxyType({
    ColorTheme.GREEN: RgbColor(0, 255, 0),
    ColorTheme.AMBER: RgbColor(255, 191, 0),
    ColorTheme.RED: RgbColor(255, 0, 0),
    ColorTheme.ORANGE: RgbColor(255, 165, 0),
    ColorTheme.BLUE: RgbColor(0, 150, 255),
    ColorTheme.PURPLE: RgbColor(128, 0, 255),
    ColorTheme.CYAN: RgbColor(0, 255, 255),
    ColorTheme.PINK: RgbColor(255, 20, 147),
    ColorTheme.WHITE: RgbColor(255, 255, 255),
})

# Half-width katakana, lambda first
MATRIX = "λｱｲｳｴｵｶｷｸｹｺｻｼｽｾｿﾀﾁﾂﾃﾄﾅﾆﾇﾈﾉﾊﾋﾌﾍﾎﾏﾐﾑﾒﾓﾔﾕﾖﾗﾘﾙﾚﾛﾜﾝ"
BINARY = "01"
SYMBOLS = "!@#$%^&*()_+-=[]{}|;':\",./<>?"
EMOJIS = "😂😅😊😂🔥💯✨🤷‍♂️🚀🎉🌟🌈🍕🍔🍟🍦📚💡⚽️🏀🎾🏐🏈🏉🏸🏓🏒🏑🏏🏹🎣🥊🥋🎽🏅🎖🏆🎫🎨🎬🎧🎤"
KANJI = "書道日本漢字文化侍"
GREEK = "αβγδεζηθικλμνξοπρστυφχψω"
CYRILLIC = "абвгдежзийклмнопрстуфхцчшщъыьэюяАБВГДЕЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ"
MATH = "∀∁∂∃∄∅∆∇∈∉∊∋∌∍∎∏∐∑−∓∔∕∖∗∘∙√∛∜∝∞∟∠∡∢∣∤∥∦∧∨∩∪"
BRAILLE = "⠁⠂⠃⠄⠅⠆⠇⠈⠉⠊⠋⠌⠍⠎⠏⠐⠑⠒⠓⠔⠕⠖⠗⠘⠙⠚⠛⠜⠝⠞⠟⠠⠡⠢⠣⠤⠥⠦⠧⠨⠩⠪⠫⠬⠭⠮⠯"
DNA = "ATCG"
PERSIAN = "ابتثجحخدذرزسشصضطظعغفقكلمنهويپچڈگھژکںیےآأؤإئءًٌٍَُِّْ"

# One entry per code point, combining marks and joiners included
CHAR_SETS = MappingProxyType({
    CharSet.MATRIX: tuple(MATRIX),
    CharSet.BINARY: tuple(BINARY),
    CharSet.SYMBOLS: tuple(SYMBOLS),
    CharSet.EMOJIS: tuple(EMOJIS),
    CharSet.KANJI: tuple(KANJI),
    CharSet.GREEK: tuple(GREEK),
    CharSet.CYRILLIC: tuple(CYRILLIC),
    CharSet.MATH: tuple(MATH),
    CharSet.BRAILLE: tuple(BRAILLE),
    CharSet.DNA: tuple(DNA),
    CharSet.PERSIAN: tuple(PERSIAN),
})
