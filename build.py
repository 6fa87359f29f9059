import PyInstaller.__main__
import os
import shutil

def build():
    # Clean previous builds
    for folder in ('build', 'dist'):
        if os.path.exists(folder):
            shutil.rmtree(folder)

    data_sep = ';' if os.name == 'nt' else ':'

    args = [
        'main.py',  # Entry point
        '--name=AudioTrack',
        '--onefile',
        '--windowed',
        '--clean',
        '--paths=src',
        # folium charge ses templates à l'exécution
        '--hidden-import=folium',
        '--hidden-import=branca',
        '--hidden-import=jinja2',
        '--hidden-import=fitparse',
        '--hidden-import=PyQt6.QtWebEngineWidgets',
        '--hidden-import=PyQt6.QtMultimedia',
        '--collect-data=folium',
        '--collect-data=branca',
        f'--add-data=data/sample-locations.json{data_sep}data',
    ]

    print("Building AudioTrack...")
    PyInstaller.__main__.run(args)
    print("Build complete. Executable is in 'dist' folder.")

if __name__ == "__main__":
    build()
