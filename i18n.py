# i18n.py
import locale

MESSAGES = {
    "en": {
        "download_success": "Successfully downloaded: {url}",
        "download_failed": "Download failed with code {code} for: {url}",
        "spawn_error": "Error spawning yt-dlp for: {url} ({error})",
        "download_finished": "Download finished.",
        "history_added": "URL added to download history: {url}",
        "download_skipped": "Download skipped.",
        "redownloading": "Re-downloading...",
        "confirm_redownload": "This URL is already in your download history. Download again?",
        "fetching_playlist": "Fetching video URLs from playlist...",
        "playlist_found": "Found {count} videos in the playlist.",
        "playlist_fetch_error": "Failed to fetch playlist videos. Please ensure the URL is correct and yt-dlp is working. ({error})",
        "all_downloaded": "All videos in this playlist are already in your download history.",
        "new_videos": "Found {count} new videos to download.",
        "starting_item": "Starting download for: {url}",
        "skipping_item": "Skipping to next video due to error.",
        "playlist_complete": "Playlist processing complete. {succeeded} successful downloads, {failed} failures.",
        "single_download_error": "Could not download '{url}': {error}",
        "config_error": "Invalid configuration: {error}",
        "help_url": "URL of the video or playlist to download.",
        "help_output": "Output directory for downloads.",
        "help_name": "Base file name, or album folder name in playlist mode.",
        "help_playlist": "Force playlist mode.",
        "help_skip_existing": "Skip download if the file already exists.",
        "help_config": "Path to a YAML settings file.",
        "help_lang": "Set the language for output messages (e.g., 'en' or 'fr').",
        "help_verbose": "Show log messages (repeat for debug output).",
    },
    "fr": {
        "download_success": "Téléchargement réussi : {url}",
        "download_failed": "Échec du téléchargement avec le code {code} pour : {url}",
        "spawn_error": "Impossible de lancer yt-dlp pour : {url} ({error})",
        "download_finished": "Téléchargement terminé.",
        "history_added": "URL ajoutée à l'historique des téléchargements : {url}",
        "download_skipped": "Téléchargement ignoré.",
        "redownloading": "Nouveau téléchargement...",
        "confirm_redownload": "Cette URL figure déjà dans votre historique. Télécharger à nouveau ?",
        "fetching_playlist": "Récupération des URLs de la playlist...",
        "playlist_found": "{count} vidéos trouvées dans la playlist.",
        "playlist_fetch_error": "Impossible de récupérer les vidéos de la playlist. Vérifiez l'URL et le fonctionnement de yt-dlp. ({error})",
        "all_downloaded": "Toutes les vidéos de cette playlist figurent déjà dans votre historique.",
        "new_videos": "{count} nouvelles vidéos à télécharger.",
        "starting_item": "Début du téléchargement de : {url}",
        "skipping_item": "Passage à la vidéo suivante suite à une erreur.",
        "playlist_complete": "Traitement de la playlist terminé. {succeeded} téléchargements réussis, {failed} échecs.",
        "single_download_error": "Impossible de télécharger '{url}' : {error}",
        "config_error": "Configuration invalide : {error}",
        "help_url": "URL de la vidéo ou de la playlist à télécharger.",
        "help_output": "Dossier de sortie pour les téléchargements.",
        "help_name": "Nom de fichier, ou nom du dossier d'album en mode playlist.",
        "help_playlist": "Forcer le mode playlist.",
        "help_skip_existing": "Ignorer le téléchargement si le fichier existe déjà.",
        "help_config": "Chemin vers un fichier de configuration YAML.",
        "help_lang": "Définit la langue des messages de sortie (ex: 'en' ou 'fr').",
        "help_verbose": "Afficher les journaux (répéter pour le mode débogage).",
    },
}

_current_lang = "en"


def get_default_lang():
    try:
        lang_code, _ = locale.getlocale()
        return "fr" if lang_code and lang_code.lower().startswith("fr") else "en"
    except (ValueError, TypeError):
        return "en"


def set_lang(lang: str):
    global _current_lang
    _current_lang = lang if lang in MESSAGES else "en"


def get_message(key, **kwargs):
    lang = _current_lang
    if lang not in MESSAGES or key not in MESSAGES[lang]:
        # Fallback to English if key not found in current language
        lang = "en"

    message_template = MESSAGES[lang].get(key, f"Translation missing for key: {key}")

    try:
        return message_template.format(**kwargs)
    except KeyError as e:
        return f"Formatting error for key '{key}': missing placeholder {e}"


# Initialize with default system language
set_lang(get_default_lang())
