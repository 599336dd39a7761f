from photo_editor.cli import main

raise SystemExit(main())
