from nextpatch.cli import main

raise SystemExit(main())
