"""
Exact arithmetic core: dyadic rationals and the ring a + b√2.

Модуль не зависит от внешних систем: только неизменяемые значения
и чистые функции.
"""
