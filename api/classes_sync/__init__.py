"""
Servicio de sincronizacion one-way: Airtable (clases) -> Webflow CMS.
"""

__version__ = "1.0.0"
