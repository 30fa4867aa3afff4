# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal del backend LoanIntake.

Los módulos se importan como 'app.*' con la carpeta 'backend' en PYTHONPATH.
"""

# Fin del archivo backend/app/__init__.py
