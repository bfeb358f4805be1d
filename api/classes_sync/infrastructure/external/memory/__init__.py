"""
Implementaciones en memoria de Source y Target (tests / desarrollo local).
"""
