# -*- coding: utf-8 -*-
"""
backend/app/modules/applications/__init__.py

Módulo de solicitudes de préstamo.

Este módulo gestiona:
- Solicitudes (Application) y su ciclo de vida
- Firmas de NDA (NDASignature)
- Derivación automática draft -> submitted

Estructura:
- enums: ApplicationStatus
- models: Application, NDASignature
- repositories: acceso a datos con escrituras condicionales
- services: ApplicationStatusDeriver
- routes: POST /applications/update-status

Los submódulos se importan explícitamente para no crear ciclos con payments.
"""

__all__: list[str] = []
