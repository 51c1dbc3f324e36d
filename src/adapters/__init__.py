"""Adaptadores de infraestructura: HTTP, fuentes de subdominios, exportación."""
