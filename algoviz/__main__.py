from algoviz.cli import main

raise SystemExit(main())
