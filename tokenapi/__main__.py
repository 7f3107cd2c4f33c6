from tokenapi.cli import main

raise SystemExit(main())
