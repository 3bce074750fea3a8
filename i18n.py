"""Display labels for the three UI languages.

Only presentation text is localized; the classifier always answers in
English and is keyed here by verdict alone.
"""
from detection.classifier import AnalysisVerdict

DEFAULT_LANGUAGE = 'EN'
SUPPORTED_LANGUAGES = ('EN', 'ES', 'FR')

LANGUAGES = [
    {'code': 'EN', 'label': 'English', 'flag': '🇬🇧'},
    {'code': 'ES', 'label': 'Español', 'flag': '🇪🇸'},
    {'code': 'FR', 'label': 'Français', 'flag': '🇫🇷'},
]

UI_TEXT = {
    'EN': {
        'title': 'Phishguard',
        'logout': 'Logout',
        'checkerTitle': 'Email Phishing Checker',
        'checkerSubtitle': 'Paste the content of an email or upload a file to check it for phishing attempts.',
        'pastePlaceholder': 'Paste email content here...',
        'uploadFile': 'Upload .eml or .txt file',
        'analyze': 'Analyze Email',
        'analyzing': 'Analyzing...',
        'safe': 'Safe',
        'suspicious': 'Suspicious',
        'phishing': 'Phishing',
        'error': 'An error occurred during analysis. Please try again.',
        'emptyInput': 'Please provide email content to analyze.',
        'invalidFile': 'Only .eml and .txt files are supported.',
        'poweredBy': 'Powered by heuristic analysis.',
    },
    'ES': {
        'title': 'Phishguard',
        'logout': 'Cerrar sesión',
        'checkerTitle': 'Verificador de Phishing en Correos',
        'checkerSubtitle': 'Pegue el contenido de un correo o suba un archivo para comprobar si es un intento de phishing.',
        'pastePlaceholder': 'Pegue aquí el contenido del correo...',
        'uploadFile': 'Subir archivo .eml o .txt',
        'analyze': 'Analizar correo',
        'analyzing': 'Analizando...',
        'safe': 'Seguro',
        'suspicious': 'Sospechoso',
        'phishing': 'Phishing',
        'error': 'Se produjo un error durante el análisis. Inténtelo de nuevo.',
        'emptyInput': 'Proporcione el contenido del correo a analizar.',
        'invalidFile': 'Solo se admiten archivos .eml y .txt.',
        'poweredBy': 'Impulsado por análisis heurístico.',
    },
    'FR': {
        'title': 'Phishguard',
        'logout': 'Déconnexion',
        'checkerTitle': "Vérificateur d'hameçonnage",
        'checkerSubtitle': "Collez le contenu d'un e-mail ou importez un fichier pour détecter une tentative d'hameçonnage.",
        'pastePlaceholder': "Collez le contenu de l'e-mail ici...",
        'uploadFile': 'Importer un fichier .eml ou .txt',
        'analyze': "Analyser l'e-mail",
        'analyzing': 'Analyse en cours...',
        'safe': 'Sûr',
        'suspicious': 'Suspect',
        'phishing': 'Hameçonnage',
        'error': "Une erreur s'est produite pendant l'analyse. Veuillez réessayer.",
        'emptyInput': "Veuillez fournir le contenu de l'e-mail à analyser.",
        'invalidFile': 'Seuls les fichiers .eml et .txt sont pris en charge.',
        'poweredBy': 'Propulsé par une analyse heuristique.',
    },
}

VERDICT_STYLES = {
    AnalysisVerdict.SAFE: {'key': 'safe', 'icon': '✅', 'css': 'result-safe'},
    AnalysisVerdict.SUSPICIOUS: {'key': 'suspicious', 'icon': '⚠️', 'css': 'result-suspicious'},
    AnalysisVerdict.PHISHING: {'key': 'phishing', 'icon': '🚨', 'css': 'result-phishing'},
}


def normalize_language(code) -> str:
    if not code:
        return DEFAULT_LANGUAGE
    code = str(code).strip().upper()
    return code if code in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def get_text(language) -> dict:
    return UI_TEXT[normalize_language(language)]


def verdict_display(verdict: AnalysisVerdict, language=DEFAULT_LANGUAGE) -> dict:
    """Label, icon and color class for a verdict in the given language."""
    style = VERDICT_STYLES[verdict]
    return {
        'label': get_text(language)[style['key']],
        'icon': style['icon'],
        'css': style['css'],
    }
