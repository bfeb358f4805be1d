"""
Cliente Airtable (Source): lectura de la tabla de clases.
"""
