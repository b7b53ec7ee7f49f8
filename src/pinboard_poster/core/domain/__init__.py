"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2).
- El dominio no conoce HTTP ni CLI: solo pins y resultados.
"""
