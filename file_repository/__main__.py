from .file_service import main

main()
