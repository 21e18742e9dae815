from pdfprint.app import main

main()
