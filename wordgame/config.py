import os


class Config:
    # Directory holding one `<language>.txt` word list per language
    DICTIONARY_DIR = os.environ.get('WORDGAME_DICTIONARY_DIR') or os.path.join(
        os.path.dirname(os.path.abspath(__file__)), '..', 'dictionaries')
    LANGUAGES = [lang.strip() for lang in os.environ.get('WORDGAME_LANGUAGES', 'ca,en,es').split(',') if lang.strip()]
    CORS_ORIGINS = [o.strip() for o in os.environ.get('WORDGAME_CORS_ORIGINS', '*').split(',') if o.strip()]
    LOG_LEVEL = os.environ.get('WORDGAME_LOG_LEVEL', 'INFO')
    MAX_PLAYERS = int(os.environ.get('WORDGAME_MAX_PLAYERS', '4'))
    MIN_PLAYERS = int(os.environ.get('WORDGAME_MIN_PLAYERS', '2'))
    RACK_SIZE = int(os.environ.get('WORDGAME_RACK_SIZE', '7'))
    BINGO_BONUS = int(os.environ.get('WORDGAME_BINGO_BONUS', '50'))
