from typescript_starter.cli import main

raise SystemExit(main())
