from pynote.main import main

raise SystemExit(main())
