"""
Cliente Webflow CMS (Target): lectura y escritura de items de la coleccion.
"""
