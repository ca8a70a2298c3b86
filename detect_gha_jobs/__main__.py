from detect_gha_jobs.cli import main

main()
