# app/shared/__init__.py
"""
Infraestructura compartida: configuración, base de datos, middlewares,
identidad (auth_context) y utilidades.

No inicializa settings en import-time para evitar efectos colaterales
durante la recolección de tests; importar desde los submódulos.
"""
# fin del archivo
