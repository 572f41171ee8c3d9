"""
===============================================================================
APPLICATION LAYER
===============================================================================

Casos de uso de la notaría (procesos y cuentas). Sin HTTP ni SQL: reciben
repositorios por constructor y devuelven resultados tipados.
===============================================================================
"""
