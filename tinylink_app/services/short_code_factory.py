"""
Factory for creating short code generation strategies.
Uses caching to avoid creating multiple instances.
"""

from enum import Enum
from tinylink_app.services.short_code_strategies import (
    ShortCodeStrategy,
    Base62ShortCodeStrategy,
    HexShortCodeStrategy
)
from tinylink_app.config import settings


class ShortCodeStrategyType(Enum):
    """Available short code generation strategies"""
    BASE62 = "base62"
    HEX = "hex"


class ShortCodeFactory:
    """Factory for creating short code generation strategies with caching"""
    
    _instances = {}  # Cache for strategy instances
    
    @classmethod
    def create_strategy(
        cls,
        strategy_type: ShortCodeStrategyType = None
    ) -> ShortCodeStrategy:
        """
        Create or return cached short code generation strategy.
        
        Args:
            strategy_type: Type of strategy to create.
                          If None, uses value from settings.
        
        Returns:
            A cached instance of a ShortCodeStrategy
        
        Raises:
            ValueError: If strategy_type is unknown
        """
        # Use default from settings if not specified
        if strategy_type is None:
            strategy_type = ShortCodeStrategyType(settings.short_code_strategy)
        
        if strategy_type in cls._instances:
            return cls._instances[strategy_type]
        
        if strategy_type == ShortCodeStrategyType.BASE62:
            instance = Base62ShortCodeStrategy()
        elif strategy_type == ShortCodeStrategyType.HEX:
            instance = HexShortCodeStrategy()
        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")
        
        cls._instances[strategy_type] = instance
        return instance
