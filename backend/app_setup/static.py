"""
Montage des fichiers statiques.
Expose /public -> répertoire public (feuille de style, images).
"""
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from backend.config import PUBLIC_DIR

def mount_static_files(app: FastAPI) -> None:
    """
    Monte le répertoire statique sur un préfixe stable.
    - check_dir=False: l'app démarre même sans assets (tests, déploiement API seule).
    """
    app.mount("/public", StaticFiles(directory=str(PUBLIC_DIR), check_dir=False), name="public")
