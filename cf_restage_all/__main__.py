from cf_restage_all.main import main

main()
