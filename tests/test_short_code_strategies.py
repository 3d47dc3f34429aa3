"""
Tests for short code generation strategies.
"""
import re
from unittest import mock

import pytest

from tinylink_app.services.short_code_strategies import (
    Base62ShortCodeStrategy,
    HexShortCodeStrategy
)
from tinylink_app.services.short_code_factory import (
    ShortCodeFactory,
    ShortCodeStrategyType
)

CODE_RE = re.compile(r"^[A-Za-z0-9]{6,8}$")


class TestBase62Strategy:
    """Test random Base62 strategy"""
    
    def test_alphabet_order(self):
        """Digits, then lowercase, then uppercase"""
        alphabet = Base62ShortCodeStrategy.alphabet
        assert len(alphabet) == 62
        assert alphabet[:10] == "0123456789"
        assert alphabet[10:36] == "abcdefghijklmnopqrstuvwxyz"
        assert alphabet[36:] == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    
    @pytest.mark.parametrize("length", [6, 7, 8])
    def test_generates_exact_length(self, length):
        strategy = Base62ShortCodeStrategy()
        
        for _ in range(50):
            code = strategy.generate(length)
            assert len(code) == length
            assert CODE_RE.fullmatch(code)
    
    def test_default_length_is_six(self):
        assert len(Base62ShortCodeStrategy().generate()) == 6
    
    @pytest.mark.parametrize("length", [0, 5, 9, 20])
    def test_rejects_out_of_range_length(self, length):
        with pytest.raises(ValueError):
            Base62ShortCodeStrategy().generate(length)
    
    def test_maps_bytes_modulo_62(self):
        """Each byte picks alphabet[byte % 62]"""
        raw = bytes([0, 61, 62, 255, 10, 36])
        with mock.patch("tinylink_app.services.short_code_strategies.secrets.token_bytes", return_value=raw):
            code = Base62ShortCodeStrategy().generate(6)
        
        # 62 -> 0, 255 % 62 == 7
        assert code == "0Z07aA"
    
    def test_codes_vary(self):
        strategy = Base62ShortCodeStrategy()
        codes = {strategy.generate(8) for _ in range(200)}
        assert len(codes) == 200


class TestHexStrategy:
    """Test hex strategy"""
    
    @pytest.mark.parametrize("length", [6, 7, 8])
    def test_generates_lowercase_hex(self, length):
        code = HexShortCodeStrategy().generate(length)
        assert len(code) == length
        assert re.fullmatch(r"[0-9a-f]+", code)
    
    def test_uses_random_bytes(self):
        with mock.patch("tinylink_app.services.short_code_strategies.secrets.token_bytes", return_value=b"\xab\xcd\xef\x01\x23\x45"):
            assert HexShortCodeStrategy().generate(6) == "abcdef"


class TestShortCodeFactory:
    """Test strategy factory"""
    
    def test_creates_base62_strategy(self):
        strategy = ShortCodeFactory.create_strategy(ShortCodeStrategyType.BASE62)
        assert isinstance(strategy, Base62ShortCodeStrategy)
    
    def test_creates_hex_strategy(self):
        strategy = ShortCodeFactory.create_strategy(ShortCodeStrategyType.HEX)
        assert isinstance(strategy, HexShortCodeStrategy)
    
    def test_caches_instances(self):
        first = ShortCodeFactory.create_strategy(ShortCodeStrategyType.BASE62)
        second = ShortCodeFactory.create_strategy(ShortCodeStrategyType.BASE62)
        assert first is second

    def test_creates_default_from_settings(self):
        """Base62 unless SHORT_CODE_STRATEGY says otherwise"""
        strategy = ShortCodeFactory.create_strategy()
        assert isinstance(strategy, Base62ShortCodeStrategy)
