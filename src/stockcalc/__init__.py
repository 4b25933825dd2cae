"""Stock price calculator: YH Finance quotes, price ranges and hypothetical moves."""

__version__ = "0.1.0"
