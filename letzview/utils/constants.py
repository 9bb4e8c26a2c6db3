"""
Constantes globales pour LetzView.

Ce module contient les constantes partagées par le domaine et les adaptateurs :
- Langues et repli par défaut des textes localisés
- Valeurs sentinelles du lecteur (piste audio d'origine, sous-titres désactivés)
- Chemins et clés de stockage du catalogue
"""

# Langue de repli quand la langue demandée n'a pas d'entrée
DEFAULT_LANGUAGE = "en"

# Langues proposées par l'interface
SUPPORTED_LANGUAGES = ("en", "fr", "de", "lb")

# Sélection audio "piste intégrée à la vidéo"
AUDIO_PRIMARY = "primary"

# Sélection sous-titres désactivés
SUBTITLES_OFF = "off"

# Resynchronisation de la piste secondaire
DRIFT_INTERVAL_SECONDS = 0.5
DRIFT_TOLERANCE_SECONDS = 0.3

# Collection racine du magasin de documents
SERIES_COLLECTION = "series"

# Clé du blob catalogue dans le magasin clé-valeur
KV_CATALOG_KEY = "letzview:db"

# Blob retourné quand le magasin clé-valeur est vide
EMPTY_CATALOG_BLOB = {"series": []}
