from desk_shell.cli import main

raise SystemExit(main())
