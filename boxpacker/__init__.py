"""boxpacker - 최소 배송 박스 선택 서비스"""

__version__ = "1.0.0"
